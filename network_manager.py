# network_manager.py
# This file defines the NetworkManager class, which encapsulates all HTTP
# communication with the remote execution service. It uses PySide6's
# QNetworkAccessManager, so every request is asynchronous on the Qt event loop.
# Each request is represented by an ApiCall object whose signals report the
# decoded response (or the failure) back to the caller.

import json
import logging

from PySide6.QtCore import QObject, Signal, QUrl, QByteArray
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkRequest, QNetworkReply

import config
from exceptions import ApiError

logger = logging.getLogger(__name__)


def decode_json_body(body):
    """
    Decodes a response body as JSON.

    Raises:
        ApiError: If the body is empty or not valid JSON.
    """
    if not body:
        raise ApiError("Malformed response from server: empty body", body=body)
    try:
        return json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise ApiError(f"Malformed response from server: {e}", body=body) from e


class ApiCall(QObject):
    """
    A single pending request. Exactly one of the two signals fires, once.
    """
    # Emitted with the decoded JSON payload (or True for body-less health checks).
    succeeded = Signal(object)
    # Emitted with an ApiError describing the failure.
    failed = Signal(object)

    def __init__(self, description, parent=None):
        super().__init__(parent)
        self.description = description
        self.is_finished = False

    def resolve(self, payload):
        if self.is_finished:
            return
        self.is_finished = True
        self.succeeded.emit(payload)

    def reject(self, error):
        if self.is_finished:
            return
        self.is_finished = True
        self.failed.emit(error)


class NetworkManager(QObject):
    """
    Client for the execution service REST API:

        GET  {base}/languages  -> [{id, name, extension, sampleCode}, ...]
        POST {base}/execute    -> {output, error, executionTime, status}
        GET  {base}/health     -> any 2xx means reachable
    """

    def __init__(self, parent=None, base_url=None, server_url=None):
        """
        Args:
            parent (QObject, optional): The parent QObject.
            base_url (str, optional): API base path or URL. Defaults to config.API_BASE_URL.
            server_url (str, optional): Server used to resolve a relative base. Defaults to config.SERVER_URL.
        """
        super().__init__(parent)
        self.base_url = base_url if base_url is not None else config.API_BASE_URL
        self.server_url = server_url if server_url is not None else config.SERVER_URL
        self._access_manager = QNetworkAccessManager(self)

    def fetch_languages(self):
        return self._send("GET", "/languages")

    def execute(self, request):
        """Submits an ExecutionRequest. No client-side timeout: the service enforces its own ceiling."""
        return self._send("POST", "/execute", payload=request.to_payload())

    def check_health(self):
        return self._send("GET", "/health", expect_json=False)

    def _send(self, method, path, payload=None, expect_json=True):
        url = config.endpoint_url(path, base=self.base_url, server=self.server_url)
        request = QNetworkRequest(QUrl(url))
        request.setHeader(QNetworkRequest.KnownHeaders.ContentTypeHeader, "application/json")
        call = ApiCall(f"{method} {path}", self)

        logger.debug("NetworkManager: %s %s", method, url)
        if method == "POST":
            body = QByteArray(json.dumps(payload).encode("utf-8"))
            reply = self._access_manager.post(request, body)
        else:
            reply = self._access_manager.get(request)
        reply.finished.connect(lambda: self._on_reply_finished(reply, call, expect_json))
        return call

    def _on_reply_finished(self, reply, call, expect_json):
        status_code = reply.attribute(QNetworkRequest.Attribute.HttpStatusCodeAttribute)
        body = bytes(reply.readAll().data())
        network_error = reply.error()
        error_string = reply.errorString()
        reply.deleteLater()

        if network_error != QNetworkReply.NetworkError.NoError or \
           (status_code is not None and not 200 <= int(status_code) < 300):
            logger.warning("NetworkManager: %s failed (HTTP %s): %s", call.description, status_code, error_string)
            call.reject(ApiError(error_string or f"HTTP {status_code}", status_code=status_code, body=body))
        elif not expect_json:
            call.resolve(True)
        else:
            try:
                payload = decode_json_body(body)
            except ApiError as e:
                e.status_code = status_code
                logger.warning("NetworkManager: %s returned an undecodable body: %s", call.description, e)
                call.reject(e)
            else:
                call.resolve(payload)
        call.deleteLater()
