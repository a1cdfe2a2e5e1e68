"""
Central registry of allowed actions per role.
"""
ROLE_SCOPES = {
    "VENDOR": {"manage_profile", "manage_services", "purchase_plan", "upload_files"},
    "USER":   {"manage_profile", "upload_files"},
}

def role_has_scope(role: str, action: str) -> bool:
    return action in ROLE_SCOPES.get(role, set())
