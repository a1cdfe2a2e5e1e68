from app.version import API_PREFIX


def test_test_support_unversioned_still_works(client):
    r = client.get("/__ok")
    assert r.status_code == 200
    js = r.get_json()
    assert js["status"] == "success"
    assert js["data"]["ping"] == "pong"


def test_test_support_also_available_under_api_v1(client):
    r = client.get(f"{API_PREFIX}/test_support/__ok")
    assert r.status_code == 200
    assert r.get_json()["data"]["ping"] == "pong"


def test_url_map_contains_api_v1_rules(app):
    rules = {str(r.rule) for r in app.url_map.iter_rules()}
    assert API_PREFIX == "/v1/api"
    for path in (
        "/v1/api/ekyc/generate-otp",
        "/v1/api/user/auth/send-otp",
        "/v1/api/vendor/onboard",
        "/v1/api/vendor/plans/initiate-payment",
        "/v1/api/plans",
        "/v1/api/webhook",
        "/v1/api/upload-file/file",
    ):
        assert path in rules


def test_apispec_lists_versioned_routes(client):
    apispec = client.get("/apispec.json").get_json()
    assert all(path.startswith(f"{API_PREFIX}/") for path in apispec["paths"])
    assert f"{API_PREFIX}/vendor/onboard" in apispec["paths"]
