# ============================================
# BUILT-IN CONSOLE ROLES
# ============================================

# Superuser: every action on every resource, no table lookup
ADMIN_ROLE = "admin"

# Read-only: "view" on every resource; other actions go through the table
VIEWER_ROLE = "viewer"

BUILT_IN_ROLES = (ADMIN_ROLE, VIEWER_ROLE)


# ============================================
# CONSOLE RESOURCES
# ============================================
# The backend stores some resource keys singular and some plural.
# These pairs are the ones the console screens actually use.
SINGULAR_PLURAL_RESOURCES = [
    ("dashboard", "dashboards"),
    ("position", "positions"),
    ("candidate", "candidates"),
    ("voter", "voters"),
    ("result", "results"),
]

COMMON_RESOURCES = [name for pair in SINGULAR_PLURAL_RESOURCES for name in pair]
