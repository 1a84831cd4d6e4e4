"""Azure Functions entry point — HTTP trigger for SSL binding requests."""

import json
import logging

import azure.functions as func

from ssl_binder.config import load_config
from ssl_binder.errors import AmbiguousApplication, BindingError, InvalidCertificateSecret
from ssl_binder.orchestrator import bind_certificate

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

_REQUIRED_FIELDS = ("app_name", "hostname", "vault_name", "certificate_name")

# BindingErrors not listed here map to 404
_ERROR_STATUS = {
    AmbiguousApplication: 409,
    InvalidCertificateSecret: 422,
}


def _json_response(body: dict, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(json.dumps(body), status_code=status_code, mimetype="application/json")


# HTTP trigger — bind a vault certificate to a web app hostname
@app.function_name("create_ssl_binding")
@app.route(route="bindings", methods=["POST"])
def create_ssl_binding(req: func.HttpRequest) -> func.HttpResponse:
    try:
        body = req.get_json()
    except ValueError:
        return _json_response({"error": "Request body must be JSON"}, 400)
    if not isinstance(body, dict):
        return _json_response({"error": "Request body must be a JSON object"}, 400)

    missing = [f for f in _REQUIRED_FIELDS if not isinstance(body.get(f), str) or not body[f].strip()]
    if missing:
        return _json_response({"error": f"Missing or empty fields: {', '.join(missing)}"}, 400)

    config = load_config()
    try:
        result = bind_certificate(config, **{f: body[f] for f in _REQUIRED_FIELDS})
    except BindingError as e:
        logging.warning("Binding request failed: %s", e)
        return _json_response({"error": type(e).__name__, "message": str(e)}, _ERROR_STATUS.get(type(e), 404))

    logging.info("Bound %s on %s", result.hostname, result.app_name)
    return _json_response(result.to_dict(), 200)
