"""Field decoding exports."""

from .field_decoder import DESCRIPTION_TAG, EXTRAS_TAG, SCHEMA_TAG, FieldDecoder
from .field_models import DecodedField, DecodedRecord, FieldDescriptor

__all__ = [
    "DESCRIPTION_TAG",
    "EXTRAS_TAG",
    "SCHEMA_TAG",
    "DecodedField",
    "DecodedRecord",
    "FieldDecoder",
    "FieldDescriptor",
]
