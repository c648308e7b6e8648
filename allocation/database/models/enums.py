from enum import IntEnum


class UserType(IntEnum):
    """users.type_id 에 저장되는 사용자 유형 코드."""
    STUDENT = 1
    STAFF = 2


class RegistrationState(IntEnum):
    """
    project_registrations.registration_state 코드.
    상태는 INTERESTED -> ASSIGNED 방향으로만 이동합니다.
    """
    INTERESTED = 1
    ASSIGNED = 2


class ProjectAvailability(IntEnum):
    AVAILABLE = 1
    UNAVAILABLE = 2
