from enum import StrEnum


class UserRole(StrEnum):
    CUSTOMER = 'customer'
    ADMIN = 'admin'
