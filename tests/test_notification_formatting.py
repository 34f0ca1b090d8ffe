from __future__ import annotations

from adapters.notification_formatting import (
    ERROR_MARKER,
    ERROR_PHRASE,
    INFO_MARKER,
    NO_DETAILS_TEXT,
    NotificationFormatter,
    format_details,
)
from core.models import NO_DETAILS, MessageDetails, StructuredDetails


def _raised(exc: Exception) -> Exception:
    try:
        raise exc
    except Exception as caught:
        return caught


def test_format_info_prefixes_marker() -> None:
    formatter = NotificationFormatter()

    assert formatter.format_info("Prueba de info") == f"{INFO_MARKER} Prueba de info"


def test_format_info_allows_empty_message() -> None:
    formatter = NotificationFormatter(info_marker="[i]")

    assert formatter.format_info("") == "[i] "


def test_format_error_includes_exception_in_code_block() -> None:
    formatter = NotificationFormatter()
    details = MessageDetails.from_exception(_raised(ValueError("Error de prueba")))

    message = formatter.format_error("Prueba de error", details)

    assert message.startswith(f"{ERROR_MARKER} {ERROR_PHRASE} Prueba de error\n```")
    assert message.endswith("```")
    assert "Error de prueba" in message
    # Raised exceptions carry their traceback.
    assert "Traceback" in message


def test_exception_without_traceback_uses_message() -> None:
    details = MessageDetails.from_exception(RuntimeError("upload failed"))

    assert details.text == "upload failed"


def test_format_error_without_details_uses_placeholder() -> None:
    formatter = NotificationFormatter()

    message = formatter.format_error("Prueba de error")

    assert message.endswith(f"```{NO_DETAILS_TEXT}```")


def test_plain_string_details_are_used_verbatim() -> None:
    assert format_details(MessageDetails("quota exceeded")) == "quota exceeded"


def test_structured_details_are_pretty_printed() -> None:
    text = format_details(StructuredDetails({"status": 403, "reason": "forbidden"}))

    assert text == '{\n  "status": 403,\n  "reason": "forbidden"\n}'


def test_circular_structured_details_fall_back_to_str() -> None:
    value: dict = {"name": "loop"}
    value["self"] = value

    assert format_details(StructuredDetails(value)) == str(value)


def test_unserializable_structured_details_fall_back_to_str() -> None:
    value = {"when": object()}

    assert format_details(StructuredDetails(value)) == str(value)


def test_markers_are_configurable() -> None:
    formatter = NotificationFormatter(error_marker="[x]", error_phrase="Error:")

    message = formatter.format_error("boom", NO_DETAILS)

    assert message == f"[x] Error: boom\n```{NO_DETAILS_TEXT}```"


def test_format_error_allows_empty_message() -> None:
    formatter = NotificationFormatter(error_marker="[x]", error_phrase="Error:")

    assert formatter.format_error("") == f"[x] Error: \n```{NO_DETAILS_TEXT}```"
