API_VERSION = "v1"
API_PREFIX = f"/{API_VERSION}/api"
