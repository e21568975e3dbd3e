"""Permission catalog.

The fixed set of permissions the console recognizes, and the closed
enumeration of capability keys that the permission matrix is built from.
Each capability key is ``can_`` followed by the permission id it tests.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Permission(BaseModel):
    """An atomic, named capability over a resource/action pair."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    resource: str
    action: str

    @property
    def key(self) -> str:
        """Permission in ``resource:action`` form."""
        return f"{self.resource}:{self.action}"


def _permission(
    permission_id: str, name: str, description: str, resource: str, action: str
) -> Permission:
    return Permission(
        id=permission_id,
        name=name,
        description=description,
        resource=resource,
        action=action,
    )


# User Management
MANAGE_USERS = _permission(
    "manage_users", "Manage Users", "Full access to user management", "users", "manage"
)
VIEW_USERS = _permission(
    "view_users", "View Users", "View user profiles and information", "users", "read"
)
CREATE_USERS = _permission(
    "create_users", "Create Users", "Create new user accounts", "users", "create"
)
UPDATE_USERS = _permission(
    "update_users", "Update Users", "Update user profiles", "users", "update"
)
DELETE_USERS = _permission(
    "delete_users", "Delete Users", "Delete user accounts", "users", "delete"
)

# Role Management
MANAGE_ROLES = _permission(
    "manage_roles", "Manage Roles", "Full access to role management", "roles", "manage"
)
ASSIGN_ROLES = _permission(
    "assign_roles", "Assign Roles", "Assign roles to users", "roles", "assign"
)
VIEW_ROLES = _permission(
    "view_roles", "View Roles", "View role information", "roles", "read"
)

# Financial
MANAGE_PAYMENTS = _permission(
    "manage_payments",
    "Manage Payments",
    "Full access to payment management",
    "payments",
    "manage",
)
VIEW_PAYMENTS = _permission(
    "view_payments", "View Payments", "View payment information", "payments", "read"
)
CREATE_PAYMENTS = _permission(
    "create_payments", "Create Payments", "Create payment records", "payments", "create"
)
UPDATE_PAYMENTS = _permission(
    "update_payments",
    "Update Payments",
    "Update payment information",
    "payments",
    "update",
)

# Classes & Schedules
MANAGE_CLASSES = _permission(
    "manage_classes",
    "Manage Classes",
    "Full access to class management",
    "classes",
    "manage",
)
VIEW_CLASSES = _permission(
    "view_classes", "View Classes", "View class schedules", "classes", "read"
)
CREATE_CLASSES = _permission(
    "create_classes", "Create Classes", "Create new classes", "classes", "create"
)
UPDATE_CLASSES = _permission(
    "update_classes", "Update Classes", "Update class information", "classes", "update"
)
DELETE_CLASSES = _permission(
    "delete_classes", "Delete Classes", "Delete classes", "classes", "delete"
)

# Reports & Analytics
VIEW_REPORTS = _permission(
    "view_reports", "View Reports", "Access to reports and analytics", "reports", "read"
)
EXPORT_DATA = _permission(
    "export_data", "Export Data", "Export system data", "data", "export"
)
VIEW_ANALYTICS = _permission(
    "view_analytics",
    "View Analytics",
    "Access to system analytics",
    "analytics",
    "read",
)

# System Settings
MANAGE_SYSTEM = _permission(
    "manage_system", "Manage System", "Full system administration", "system", "manage"
)
VIEW_SYSTEM_SETTINGS = _permission(
    "view_system_settings",
    "View System Settings",
    "View system configuration",
    "system",
    "read",
)
UPDATE_SYSTEM_SETTINGS = _permission(
    "update_system_settings",
    "Update System Settings",
    "Update system configuration",
    "system",
    "update",
)

# Communication
SEND_SMS = _permission(
    "send_sms", "Send SMS", "Send SMS messages", "communication", "sms"
)
SEND_NOTIFICATIONS = _permission(
    "send_notifications",
    "Send Notifications",
    "Send system notifications",
    "communication",
    "notify",
)
MANAGE_COMMUNICATION = _permission(
    "manage_communication",
    "Manage Communication",
    "Full access to communication features",
    "communication",
    "manage",
)

# Equipment
MANAGE_EQUIPMENT = _permission(
    "manage_equipment",
    "Manage Equipment",
    "Full access to equipment management",
    "equipment",
    "manage",
)
VIEW_EQUIPMENT = _permission(
    "view_equipment",
    "View Equipment",
    "View equipment information",
    "equipment",
    "read",
)
CREATE_EQUIPMENT = _permission(
    "create_equipment", "Create Equipment", "Add new equipment", "equipment", "create"
)
UPDATE_EQUIPMENT = _permission(
    "update_equipment",
    "Update Equipment",
    "Update equipment information",
    "equipment",
    "update",
)

# Workouts
MANAGE_WORKOUTS = _permission(
    "manage_workouts",
    "Manage Workouts",
    "Full access to workout management",
    "workouts",
    "manage",
)
VIEW_WORKOUTS = _permission(
    "view_workouts", "View Workouts", "View workout programs", "workouts", "read"
)
CREATE_WORKOUTS = _permission(
    "create_workouts",
    "Create Workouts",
    "Create new workout programs",
    "workouts",
    "create",
)
UPDATE_WORKOUTS = _permission(
    "update_workouts",
    "Update Workouts",
    "Update workout programs",
    "workouts",
    "update",
)

# Memberships
MANAGE_MEMBERSHIPS = _permission(
    "manage_memberships",
    "Manage Memberships",
    "Full access to membership management",
    "memberships",
    "manage",
)
VIEW_MEMBERSHIPS = _permission(
    "view_memberships",
    "View Memberships",
    "View membership information",
    "memberships",
    "read",
)
CREATE_MEMBERSHIPS = _permission(
    "create_memberships",
    "Create Memberships",
    "Create new memberships",
    "memberships",
    "create",
)
UPDATE_MEMBERSHIPS = _permission(
    "update_memberships",
    "Update Memberships",
    "Update membership information",
    "memberships",
    "update",
)

# Attendance
VIEW_ATTENDANCE = _permission(
    "view_attendance",
    "View Attendance",
    "View attendance records",
    "attendance",
    "read",
)
MANAGE_ATTENDANCE = _permission(
    "manage_attendance",
    "Manage Attendance",
    "Full access to attendance management",
    "attendance",
    "manage",
)
CHECK_IN_OUT = _permission(
    "check_in_out",
    "Check In/Out",
    "Personal check-in and check-out",
    "attendance",
    "checkin",
)

# Personal Data
VIEW_OWN_DATA = _permission(
    "view_own_data", "View Own Data", "View personal data and records", "profile", "read"
)
UPDATE_OWN_PROFILE = _permission(
    "update_own_profile",
    "Update Own Profile",
    "Update personal profile",
    "profile",
    "update",
)
VIEW_ALL_MEMBERS = _permission(
    "view_all_members",
    "View All Members",
    "View all member profiles",
    "members",
    "read",
)


PERMISSIONS: dict[str, Permission] = {
    p.id: p
    for p in (
        MANAGE_USERS,
        VIEW_USERS,
        CREATE_USERS,
        UPDATE_USERS,
        DELETE_USERS,
        MANAGE_ROLES,
        ASSIGN_ROLES,
        VIEW_ROLES,
        MANAGE_PAYMENTS,
        VIEW_PAYMENTS,
        CREATE_PAYMENTS,
        UPDATE_PAYMENTS,
        MANAGE_CLASSES,
        VIEW_CLASSES,
        CREATE_CLASSES,
        UPDATE_CLASSES,
        DELETE_CLASSES,
        VIEW_REPORTS,
        EXPORT_DATA,
        VIEW_ANALYTICS,
        MANAGE_SYSTEM,
        VIEW_SYSTEM_SETTINGS,
        UPDATE_SYSTEM_SETTINGS,
        SEND_SMS,
        SEND_NOTIFICATIONS,
        MANAGE_COMMUNICATION,
        MANAGE_EQUIPMENT,
        VIEW_EQUIPMENT,
        CREATE_EQUIPMENT,
        UPDATE_EQUIPMENT,
        MANAGE_WORKOUTS,
        VIEW_WORKOUTS,
        CREATE_WORKOUTS,
        UPDATE_WORKOUTS,
        MANAGE_MEMBERSHIPS,
        VIEW_MEMBERSHIPS,
        CREATE_MEMBERSHIPS,
        UPDATE_MEMBERSHIPS,
        VIEW_ATTENDANCE,
        MANAGE_ATTENDANCE,
        CHECK_IN_OUT,
        VIEW_OWN_DATA,
        UPDATE_OWN_PROFILE,
        VIEW_ALL_MEMBERS,
    )
}


class Capability(str, Enum):
    """Capability keys of the permission matrix.

    Members compare equal to their string values, so route code and
    templates may pass either the member or the plain key.
    """

    # User Management
    MANAGE_USERS = "can_manage_users"
    VIEW_USERS = "can_view_users"
    CREATE_USERS = "can_create_users"
    UPDATE_USERS = "can_update_users"
    DELETE_USERS = "can_delete_users"

    # Role Management
    MANAGE_ROLES = "can_manage_roles"
    ASSIGN_ROLES = "can_assign_roles"
    VIEW_ROLES = "can_view_roles"

    # Financial
    MANAGE_PAYMENTS = "can_manage_payments"
    VIEW_PAYMENTS = "can_view_payments"
    CREATE_PAYMENTS = "can_create_payments"
    UPDATE_PAYMENTS = "can_update_payments"

    # Classes & Schedules
    MANAGE_CLASSES = "can_manage_classes"
    VIEW_CLASSES = "can_view_classes"
    CREATE_CLASSES = "can_create_classes"
    UPDATE_CLASSES = "can_update_classes"
    DELETE_CLASSES = "can_delete_classes"

    # Reports & Analytics
    VIEW_REPORTS = "can_view_reports"
    EXPORT_DATA = "can_export_data"
    VIEW_ANALYTICS = "can_view_analytics"

    # System Settings
    MANAGE_SYSTEM = "can_manage_system"
    VIEW_SYSTEM_SETTINGS = "can_view_system_settings"
    UPDATE_SYSTEM_SETTINGS = "can_update_system_settings"

    # Communication
    SEND_SMS = "can_send_sms"
    SEND_NOTIFICATIONS = "can_send_notifications"
    MANAGE_COMMUNICATION = "can_manage_communication"

    # Equipment
    MANAGE_EQUIPMENT = "can_manage_equipment"
    VIEW_EQUIPMENT = "can_view_equipment"
    CREATE_EQUIPMENT = "can_create_equipment"
    UPDATE_EQUIPMENT = "can_update_equipment"

    # Workouts
    MANAGE_WORKOUTS = "can_manage_workouts"
    VIEW_WORKOUTS = "can_view_workouts"
    CREATE_WORKOUTS = "can_create_workouts"
    UPDATE_WORKOUTS = "can_update_workouts"

    # Memberships
    MANAGE_MEMBERSHIPS = "can_manage_memberships"
    VIEW_MEMBERSHIPS = "can_view_memberships"
    CREATE_MEMBERSHIPS = "can_create_memberships"
    UPDATE_MEMBERSHIPS = "can_update_memberships"

    # Attendance
    VIEW_ATTENDANCE = "can_view_attendance"
    MANAGE_ATTENDANCE = "can_manage_attendance"
    CHECK_IN_OUT = "can_check_in_out"

    # Personal Data Access
    VIEW_OWN_DATA = "can_view_own_data"
    UPDATE_OWN_PROFILE = "can_update_own_profile"
    VIEW_ALL_MEMBERS = "can_view_all_members"

    def __str__(self) -> str:
        return self.value

    @property
    def permission_id(self) -> str:
        """Id of the catalog permission this capability tests."""
        return self.value.removeprefix("can_")

    @classmethod
    def parse(cls, key: "str | Capability") -> "Capability | None":
        """Resolve a capability key, or None if it isn't recognized."""
        try:
            return cls(key)
        except ValueError:
            return None


def lookup_permission(permission_id: str) -> Permission | None:
    """Find a catalog permission by id."""
    return PERMISSIONS.get(permission_id)


def permissions_for_resource(resource: str) -> list[Permission]:
    """Catalog permissions governing ``resource``, in catalog order."""
    return [p for p in PERMISSIONS.values() if p.resource == resource]
