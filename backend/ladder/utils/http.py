from enum import auto

from ladder.utils.types import EnumAutoStr


class HTTPMethod(EnumAutoStr):
    GET = auto()
    POST = auto()
    PUT = auto()
    DELETE = auto()
