"""
Bidirectional codecs.

A codec pairs an input validator and an output validator with a
decode/encode function pair:

- parse / safe_parse: validate input, decode, validate output
- encode / safe_encode: validate output, encode, validate input

Decode and encode may be coroutine functions; those codecs must be used
through the ``*_async`` methods; the synchronous methods fail with a
"use the async method" issue instead of running them.
"""

import inspect
import logging
from typing import Any, Callable, Optional

from ..context import ParseContext
from ..errors import Issue, IssueCode, ValidationError
from ..result import ParseResult
from ..validators.base import Validator, ValidatorKind, callback_failure

logger = logging.getLogger(__name__)

DECODE = "decode"
ENCODE = "encode"

_ASYNC_METHODS = {DECODE: "parse_async", ENCODE: "encode_async"}


class Codec(Validator):
    """
    Validator that converts between two validated representations.

    Example:
        >>> to_int = Codec(string(), number().int(), decode=int, encode=str)
        >>> to_int.parse("42")
        42
        >>> to_int.encode(42)
        '42'
    """

    kind = ValidatorKind.CODEC

    def __init__(
        self,
        input_schema: Validator,
        output_schema: Validator,
        decode: Callable[[Any], Any],
        encode: Callable[[Any], Any],
    ):
        for schema in (input_schema, output_schema):
            if not isinstance(schema, Validator):
                raise TypeError(f"Codec expects validators, got {type(schema).__name__}")
        if not callable(decode) or not callable(encode):
            raise TypeError("Codec decode and encode must be callable")
        self._set(_input=input_schema, _output=output_schema, _decode=decode, _encode=encode)

    @property
    def input_schema(self) -> Validator:
        return self._input

    @property
    def output_schema(self) -> Validator:
        return self._output

    def _direction(self, direction: str):
        if direction == DECODE:
            return self._input, self._output, self._decode
        return self._output, self._input, self._encode

    def _async_required(self, ctx: ParseContext, direction: str) -> ParseResult:
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.CUSTOM,
                    message=ctx.render(
                        "codec_async_required", direction=direction, method=_ASYNC_METHODS[direction]
                    ),
                )
            ]
        )

    def _conversion_failed(self, ctx: ParseContext, direction: str, error: Exception) -> ParseResult:
        logger.debug(f"Codec {direction} failed: {error}")
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.TRANSFORM_FAILED,
                    message=ctx.render(f"codec_{direction}_failed", error=str(error)),
                )
            ]
        )

    def _convert(self, value: Any, ctx: ParseContext, direction: str) -> ParseResult:
        source, target, fn = self._direction(direction)
        first = source._parse(value, ctx)
        if not first.success:
            return first
        if inspect.iscoroutinefunction(fn):
            return self._async_required(ctx, direction)
        try:
            converted = fn(first.data)
        except ValidationError as e:
            return ParseResult.fail(e.issues)
        except Exception as e:
            return self._conversion_failed(ctx, direction, e)
        if inspect.isawaitable(converted):
            if inspect.iscoroutine(converted):
                converted.close()
            return self._async_required(ctx, direction)
        return target._parse(converted, ctx)

    async def _convert_async(self, value: Any, ctx: ParseContext, direction: str) -> ParseResult:
        source, target, fn = self._direction(direction)
        first = source._parse(value, ctx)
        if not first.success:
            return first
        try:
            converted = fn(first.data)
            if inspect.isawaitable(converted):
                converted = await converted
        except ValidationError as e:
            return ParseResult.fail(e.issues)
        except Exception as e:
            return self._conversion_failed(ctx, direction, e)
        return target._parse(converted, ctx)

    def _parse(self, value, ctx):
        return self._convert(value, ctx, DECODE)

    # ------------------------------------------------------------------
    # Encode direction
    # ------------------------------------------------------------------

    def safe_encode(
        self, value: Any, *, locale: Optional[str] = None, collect_all: Optional[bool] = None
    ) -> ParseResult:
        ctx = ParseContext.create(locale=locale, collect_all=collect_all)
        try:
            return self._convert(value, ctx, ENCODE)
        except Exception as e:
            return callback_failure(ctx, e, "codec encode")

    def encode(self, value: Any, *, locale: Optional[str] = None) -> Any:
        """
        Encode ``value`` back to the input representation.

        Raises:
            ValidationError: If either side fails validation or encoding fails
        """
        ctx = ParseContext.create(locale=locale, collect_all=False)
        try:
            result = self._convert(value, ctx, ENCODE)
        except Exception as e:
            result = callback_failure(ctx, e, "codec encode")
        return result.unwrap()

    # ------------------------------------------------------------------
    # Async variants
    # ------------------------------------------------------------------

    async def _safe_async(self, value: Any, direction: str, locale, collect_all) -> ParseResult:
        ctx = ParseContext.create(locale=locale, collect_all=collect_all)
        try:
            return await self._convert_async(value, ctx, direction)
        except Exception as e:
            return callback_failure(ctx, e, f"codec {direction}")

    async def safe_parse_async(
        self, value: Any, *, locale: Optional[str] = None, collect_all: Optional[bool] = None
    ) -> ParseResult:
        return await self._safe_async(value, DECODE, locale, collect_all)

    async def parse_async(self, value: Any, *, locale: Optional[str] = None) -> Any:
        result = await self._safe_async(value, DECODE, locale, False)
        return result.unwrap()

    async def safe_encode_async(
        self, value: Any, *, locale: Optional[str] = None, collect_all: Optional[bool] = None
    ) -> ParseResult:
        return await self._safe_async(value, ENCODE, locale, collect_all)

    async def encode_async(self, value: Any, *, locale: Optional[str] = None) -> Any:
        result = await self._safe_async(value, ENCODE, locale, False)
        return result.unwrap()

    def __repr__(self) -> str:
        return f"Codec({self._input!r} <-> {self._output!r})"
