# shutility/config/array_config.py
from pydantic import BaseModel
from enum import Enum


class Collation(str, Enum):
    BYTES = "bytes"
    LOCALE = "locale"


class ArrayConfig(BaseModel):
    collation: Collation = Collation.BYTES
