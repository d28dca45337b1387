from enum import StrEnum


class UserRole(StrEnum):
    USER = 'user'
    ORGANIZER = 'organizer'
    ADMIN = 'admin'
