"""Core domain package for the autouploader.

Core holds configuration shapes, error types, and the notification dispatcher
without any HTTP or Discord-specific code, keeping the business logic portable.
"""
