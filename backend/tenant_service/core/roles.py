from enum import Enum


class UserRole(str, Enum):
    MASTER = "MASTER"
    PRODUCER = "PRODUCER"
    MANAGER = "MANAGER"


# Single source for the capability string handed to the credential pipeline
AUTHORITIES = {
    UserRole.MASTER: "ROLE_MASTER",
    UserRole.PRODUCER: "ROLE_PRODUCER",
    UserRole.MANAGER: "ROLE_MANAGER",
}


def authority_for(role) -> str:
    return AUTHORITIES[UserRole(role)]
