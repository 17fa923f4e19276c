"""
Input casting service.

Lenient conversion of request values into typed values. Nothing here raises;
failures are reported through CastResult.error.
"""

import json
import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel

logger = logging.getLogger("faas.input_casting")

T = TypeVar("T")

CastType = Literal["string", "number", "integer", "boolean", "date", "array"]

TRUTHY_TOKENS = {"true", "1", "yes", "da", "on"}
FALSY_TOKENS = {"false", "0", "no", "nu", "off", ""}


class CastOptions(BaseModel):
    strict: bool = False
    default_value: Any = None
    allow_null: bool = False

    @property
    def has_default(self) -> bool:
        # An explicitly passed None still counts as a default.
        return "default_value" in self.model_fields_set

    def fallback(self) -> Any:
        return self.default_value if self.has_default else None


class CastResult(BaseModel, Generic[T]):
    success: bool
    value: Optional[T] = None
    error: Optional[str] = None


class FieldSchema(BaseModel):
    type: CastType
    options: Optional[CastOptions] = None


def _null_result(options: CastOptions, convert: Callable[[Any], Any]) -> CastResult:
    if options.allow_null:
        return CastResult(success=True, value=None)
    if options.has_default:
        try:
            return CastResult(success=True, value=convert(options.default_value))
        except (TypeError, ValueError) as e:
            return CastResult(success=False, value=None, error=f"Invalid default value: {e}")
    return CastResult(success=False, value=None, error="Input is null or undefined")


def _parse_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        # Digit separators are not numbers; radix prefixes are.
        if "_" in text:
            raise ValueError(f"invalid number {value!r}")
        if text[:2].lower() in ("0x", "0o", "0b"):
            return float(int(text, 0))
        return float(text)
    raise ValueError(f"unsupported type {type(value).__name__}")


def _parse_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise ValueError("Input cannot be converted to Date")
    if isinstance(value, (int, float)):
        # Epoch milliseconds
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError("Input cannot be converted to Date")


class InputCastingService:
    @staticmethod
    def to_string(input: Any, options: Optional[CastOptions] = None) -> CastResult[str]:
        options = options or CastOptions()
        if input is None:
            return _null_result(options, str)
        try:
            if isinstance(input, bool):
                return CastResult(success=True, value="true" if input else "false")
            return CastResult(success=True, value=str(input))
        except Exception as e:
            return CastResult(
                success=False,
                value=options.fallback(),
                error=f"Error converting to string: {e}",
            )

    @staticmethod
    def to_number(input: Any, options: Optional[CastOptions] = None) -> CastResult[float]:
        options = options or CastOptions()
        if input is None:
            return _null_result(options, _parse_number)

        if isinstance(input, str) and input.strip() == "":
            if options.has_default:
                return _null_result(options.model_copy(update={"allow_null": False}), _parse_number)
            return CastResult(
                success=False, value=None, error="Empty string cannot be converted to number"
            )

        if options.strict and (isinstance(input, bool) or not isinstance(input, (int, float, str))):
            return CastResult(
                success=False,
                value=options.fallback(),
                error="Strict mode: input must be number or string",
            )

        try:
            result = _parse_number(input)
        except (TypeError, ValueError):
            result = math.nan

        if math.isnan(result):
            return CastResult(
                success=False,
                value=options.fallback(),
                error="Value cannot be converted to valid number",
            )
        return CastResult(success=True, value=result)

    @classmethod
    def to_integer(cls, input: Any, options: Optional[CastOptions] = None) -> CastResult[int]:
        number_result = cls.to_number(input, options)
        if not number_result.success or number_result.value is None:
            return number_result
        if math.isinf(number_result.value):
            return CastResult(
                success=False, value=None, error="Value cannot be converted to valid integer"
            )
        return CastResult(success=True, value=math.trunc(number_result.value))

    @staticmethod
    def to_boolean(input: Any, options: Optional[CastOptions] = None) -> CastResult[bool]:
        options = options or CastOptions()
        if input is None:
            return _null_result(options, bool)

        if isinstance(input, str):
            token = input.strip().lower()
            if token in TRUTHY_TOKENS:
                return CastResult(success=True, value=True)
            if token in FALSY_TOKENS:
                return CastResult(success=True, value=False)

        try:
            return CastResult(success=True, value=bool(input))
        except Exception as e:
            return CastResult(
                success=False,
                value=options.fallback(),
                error=f"Error converting to boolean: {e}",
            )

    @staticmethod
    def to_date(input: Any, options: Optional[CastOptions] = None) -> CastResult[datetime]:
        options = options or CastOptions()
        if input is None:
            if options.allow_null:
                return CastResult(success=True, value=None)
            if options.has_default:
                try:
                    return CastResult(success=True, value=_parse_date(options.default_value))
                except (TypeError, ValueError, OverflowError, OSError) as e:
                    return CastResult(success=False, value=None, error=f"Error converting to Date: {e}")
            return CastResult(success=False, value=None, error="Input is null or undefined")

        if not isinstance(input, (datetime, date, str, int, float)) or isinstance(input, bool):
            return CastResult(
                success=False,
                value=options.fallback(),
                error="Input cannot be converted to Date",
            )

        try:
            return CastResult(success=True, value=_parse_date(input))
        except (TypeError, ValueError, OverflowError, OSError):
            return CastResult(
                success=False,
                value=options.fallback(),
                error="Resulting date is not valid",
            )

    @staticmethod
    def to_array(
        input: Any,
        item_caster: Optional[Callable[[Any], CastResult]] = None,
        options: Optional[CastOptions] = None,
    ) -> CastResult[List[Any]]:
        options = options or CastOptions()
        if input is None:
            if options.allow_null:
                return CastResult(success=True, value=None)
            if options.has_default:
                return CastResult(success=True, value=options.default_value)
            return CastResult(success=False, value=None, error="Input is null or undefined")

        if isinstance(input, (list, tuple)):
            items = list(input)
        elif isinstance(input, str):
            try:
                parsed = json.loads(input)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                items = parsed
            else:
                items = [item.strip() for item in input.split(",")]
        else:
            items = [input]

        if item_caster is None:
            return CastResult(success=True, value=items)

        cast_items: List[Any] = []
        errors: List[str] = []
        for index, item in enumerate(items):
            result = item_caster(item)
            if result.success and result.value is not None:
                cast_items.append(result.value)
            elif result.error:
                errors.append(f"Element {index}: {result.error}")

        if errors and options.strict:
            return CastResult(
                success=False,
                value=options.fallback(),
                error=f"Casting errors: {', '.join(errors)}",
            )
        return CastResult(success=True, value=cast_items)

    @classmethod
    def cast(cls, input: Any, type: str, options: Optional[CastOptions] = None) -> CastResult:
        if type == "string":
            return cls.to_string(input, options)
        if type == "number":
            return cls.to_number(input, options)
        if type == "integer":
            return cls.to_integer(input, options)
        if type == "boolean":
            return cls.to_boolean(input, options)
        if type == "date":
            return cls.to_date(input, options)
        if type == "array":
            return cls.to_array(input, None, options)
        return CastResult(success=False, value=None, error=f"Unsupported type: {type}")

    @classmethod
    def cast_object(
        cls, input: Any, schema: Dict[str, FieldSchema], strict: bool = False
    ) -> CastResult[Dict[str, Any]]:
        if not isinstance(input, dict):
            return CastResult(success=False, value=None, error="Input is not a valid object")

        result: Dict[str, Any] = {}
        errors: List[str] = []
        for key, field in schema.items():
            cast_result = cls.cast(input.get(key), field.type, field.options)
            if cast_result.success or not strict:
                result[key] = cast_result.value
            else:
                errors.append(f"{key}: {cast_result.error}")

        if errors:
            logger.debug(f"cast_object rejected {len(errors)} field(s)")
            return CastResult(success=False, value=None, error=f"Casting errors: {', '.join(errors)}")
        return CastResult(success=True, value=result)
