"""
docseal - Document Serialization

Encodes structured documents to canonical JSON bytes and back.

A document is either a JSON-compatible mapping or a pydantic model.
Canonical form: sorted keys, compact separators, UTF-8, no NaN/Infinity.
"""

import json
from collections.abc import Mapping
from typing import Any, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .errors import DeserializationError, SerializationError

ModelT = TypeVar('ModelT', bound=BaseModel)

Document = Union[Mapping, BaseModel]


def serialize_document(document: Document) -> bytes:
    """
    Serialize a document into canonical JSON bytes.

    Raises:
        SerializationError: Not a mapping/model, or holds non-JSON values
    """
    if isinstance(document, BaseModel):
        try:
            document = document.model_dump(mode="json")
        except Exception as e:
            raise SerializationError(f"Unable to dump {type(document).__name__}: {e}") from e
    elif isinstance(document, Mapping):
        document = dict(document)
    else:
        raise SerializationError(
            f"Document must be a mapping or pydantic model, got {type(document).__name__}"
        )

    try:
        text = json.dumps(
            document,
            sort_keys=True,
            separators=(',', ':'),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Document is not JSON serializable: {e}") from e
    return text.encode('utf-8')


def deserialize_document(
    data: bytes,
    model: Optional[Type[ModelT]] = None,
) -> Union[Dict[str, Any], ModelT]:
    """
    Decode canonical JSON bytes back into a document.

    Args:
        data: Serialized document
        model: Optional pydantic model to validate the mapping into

    Returns:
        A dict, or an instance of `model`

    Raises:
        DeserializationError: Invalid UTF-8/JSON, non-object top level,
            or model validation failure
    """
    try:
        payload = json.loads(data.decode('utf-8'))
    except (UnicodeDecodeError, ValueError) as e:
        raise DeserializationError(f"Invalid document encoding: {e}") from e

    if not isinstance(payload, dict):
        raise DeserializationError(
            f"Document must be a JSON object, got {type(payload).__name__}"
        )

    if model is None:
        return payload

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise DeserializationError(
            f"Document does not match {model.__name__}: {e.error_count()} error(s)"
        ) from e
