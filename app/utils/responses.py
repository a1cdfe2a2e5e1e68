from flask import jsonify


def ok(data=None, message="success", status=200):
    payload = {"status": "success", "message": message}
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def created(data=None, message="created"):
    return ok(data, message=message, status=201)


def error(message, status=400, code=None, data=None):
    payload = {
        "status": "error",
        "message": message,
        "code": code or status
    }
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def validation_error_response(errors):
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg"),
            "code": err.get("type"),
        }
        for err in errors
    ]
    return jsonify({
        "status": "error",
        "message": "Validation error",
        "code": 400,
        "errors": details,
    }), 400
