import logging
from unittest.mock import Mock, patch

from airstore_uploader.api.alerts import log_alert, notify_failure
from airstore_uploader.exceptions import UploaderTransportError


def test_notify_failure_calls_alert_with_formatted_message():
  show_alert = Mock()

  message = notify_failure(UploaderTransportError("Request error: refused"), show_alert)

  assert message == "Request error: refused"
  show_alert.assert_called_once_with("", "Request error: refused", "error")


def test_log_alert_maps_level():
  with patch("airstore_uploader.api.alerts.logger") as mock_logger:
    log_alert("Upload", "done", "success")
    log_alert("", "failed")

  first, second = mock_logger.log.call_args_list
  assert first.args == (logging.INFO, "Upload: done")
  assert second.args == (logging.ERROR, "failed")
  assert second.kwargs["extra"] == {"component": "alerts", "action": "error"}
