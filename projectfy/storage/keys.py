"""Fixed storage keys, one per persisted collection or value."""


class StorageKeys:
    USERS = "users"
    PROJECTS = "projects"
    TASKS = "tasks"
    SCHEDULE = "schedule"
    ALERTS = "alerts"
    NOTES = "notes"
    APPOINTMENTS = "appointments"
    TIME_LOGS = "time_logs"
    PURCHASES = "purchases"
    USER_TOKEN = "userToken"
    CURRENT_USER = "currentUser"

    QUARANTINE_PREFIX = "quarantine:"

    @classmethod
    def collections(cls) -> list:
        return [
            cls.USERS,
            cls.PROJECTS,
            cls.TASKS,
            cls.SCHEDULE,
            cls.ALERTS,
            cls.NOTES,
            cls.APPOINTMENTS,
            cls.TIME_LOGS,
            cls.PURCHASES,
        ]

    @classmethod
    def all(cls) -> list:
        return cls.collections() + [cls.USER_TOKEN, cls.CURRENT_USER]

    @classmethod
    def quarantine(cls, key: str) -> str:
        return f"{cls.QUARANTINE_PREFIX}{key}"
