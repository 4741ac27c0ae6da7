from enum import Enum


class Environment(Enum):
    CONTAINER = "container"
    LINUX_HOST = "linux_host"
    GENERIC_HOST = "generic_host"
