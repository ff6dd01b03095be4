"""Restricted decoder for pickled sessions (``PickleSerializer``).

Only the opcodes needed to rebuild dicts, lists, tuples, text, numbers,
booleans and ``None`` are interpreted. Anything that would import a module
or call an object (``GLOBAL``, ``STACK_GLOBAL``, ``REDUCE``, ``BUILD``,
``NEWOBJ``, ``INST``, ``OBJ``, extension codes, ...) is rejected with
``UnsupportedFormat`` before any of it is acted on.
"""

from __future__ import annotations

import pickletools
from typing import Any, Callable, Dict, List

from ..errors import DeserializationError, KeyTypeError, SignedCookieError, UnsupportedFormat
from .base import Serializer, SessionSerializer
from .types import Session, normalize_session

MAX_PROTOCOL = 5


class RestrictedUnpickler:
    """Stack machine over ``pickletools.genops`` for an allow-listed opcode set."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._stack: List[Any] = []
        self._metastack: List[List[Any]] = []
        self._memo: Dict[int, Any] = {}

    def load(self) -> Any:
        try:
            for opcode, arg, pos in pickletools.genops(self._data):
                if opcode.name == "STOP":
                    return self._pop()
                handler = self._dispatch.get(opcode.name)
                if handler is None:
                    raise UnsupportedFormat(f"pickle opcode {opcode.name} at position {pos} is not supported")
                handler(self, arg)
        except SignedCookieError:
            raise
        except ValueError as exc:
            raise DeserializationError(f"malformed pickle stream: {exc}") from exc
        raise DeserializationError("pickle stream ended without STOP")

    # -- stack helpers -----------------------------------------------------

    def _push(self, value: Any) -> None:
        self._stack.append(value)

    def _pop(self) -> Any:
        if not self._stack:
            raise DeserializationError("pickle stack underflow")
        return self._stack.pop()

    def _top(self, expected: type) -> Any:
        if not self._stack or not isinstance(self._stack[-1], expected):
            raise DeserializationError(f"expected a {expected.__name__} on the pickle stack")
        return self._stack[-1]

    def _pop_mark(self) -> List[Any]:
        if not self._metastack:
            raise DeserializationError("pickle MARK missing")
        items = self._stack
        self._stack = self._metastack.pop()
        return items

    @staticmethod
    def _set_items(target: dict, items: List[Any]) -> None:
        if len(items) % 2:
            raise DeserializationError("odd number of dict items in pickle stream")
        for i in range(0, len(items), 2):
            try:
                target[items[i]] = items[i + 1]
            except TypeError as exc:
                raise KeyTypeError(f"unhashable mapping key of type {type(items[i]).__name__}") from exc

    # -- opcode handlers ---------------------------------------------------

    def _load_proto(self, arg: int) -> None:
        if arg > MAX_PROTOCOL:
            raise UnsupportedFormat(f"pickle protocol {arg} is not supported")

    def _load_frame(self, arg: int) -> None:
        pass

    def _load_mark(self, arg: None) -> None:
        self._metastack.append(self._stack)
        self._stack = []

    def _load_value(self, arg: Any) -> None:
        self._push(arg)

    def _load_none(self, arg: None) -> None:
        self._push(None)

    def _load_true(self, arg: None) -> None:
        self._push(True)

    def _load_false(self, arg: None) -> None:
        self._push(False)

    def _load_empty_dict(self, arg: None) -> None:
        self._push({})

    def _load_dict(self, arg: None) -> None:
        target: dict = {}
        self._set_items(target, self._pop_mark())
        self._push(target)

    def _load_setitem(self, arg: None) -> None:
        value = self._pop()
        key = self._pop()
        self._set_items(self._top(dict), [key, value])

    def _load_setitems(self, arg: None) -> None:
        items = self._pop_mark()
        self._set_items(self._top(dict), items)

    def _load_empty_list(self, arg: None) -> None:
        self._push([])

    def _load_list(self, arg: None) -> None:
        self._push(self._pop_mark())

    def _load_append(self, arg: None) -> None:
        value = self._pop()
        self._top(list).append(value)

    def _load_appends(self, arg: None) -> None:
        items = self._pop_mark()
        self._top(list).extend(items)

    def _load_empty_tuple(self, arg: None) -> None:
        self._push(())

    def _load_tuple(self, arg: None) -> None:
        self._push(tuple(self._pop_mark()))

    def _load_tuple1(self, arg: None) -> None:
        self._push((self._pop(),))

    def _load_tuple2(self, arg: None) -> None:
        second = self._pop()
        self._push((self._pop(), second))

    def _load_tuple3(self, arg: None) -> None:
        third = self._pop()
        second = self._pop()
        self._push((self._pop(), second, third))

    def _load_put(self, arg: int) -> None:
        if not self._stack:
            raise DeserializationError("pickle PUT on an empty stack")
        self._memo[arg] = self._stack[-1]

    def _load_memoize(self, arg: None) -> None:
        self._load_put(len(self._memo))

    def _load_get(self, arg: int) -> None:
        try:
            self._push(self._memo[arg])
        except KeyError:
            raise DeserializationError(f"pickle memo has no entry {arg}") from None

    _dispatch: Dict[str, Callable[["RestrictedUnpickler", Any], None]] = {
        "PROTO": _load_proto,
        "FRAME": _load_frame,
        "MARK": _load_mark,
        "NONE": _load_none,
        "NEWTRUE": _load_true,
        "NEWFALSE": _load_false,
        "INT": _load_value,
        "BININT": _load_value,
        "BININT1": _load_value,
        "BININT2": _load_value,
        "LONG": _load_value,
        "LONG1": _load_value,
        "LONG4": _load_value,
        "FLOAT": _load_value,
        "BINFLOAT": _load_value,
        # Python 2 byte strings; pickletools hands them over as latin-1 text.
        "STRING": _load_value,
        "BINSTRING": _load_value,
        "SHORT_BINSTRING": _load_value,
        "UNICODE": _load_value,
        "BINUNICODE": _load_value,
        "SHORT_BINUNICODE": _load_value,
        "BINUNICODE8": _load_value,
        "EMPTY_DICT": _load_empty_dict,
        "DICT": _load_dict,
        "SETITEM": _load_setitem,
        "SETITEMS": _load_setitems,
        "EMPTY_LIST": _load_empty_list,
        "LIST": _load_list,
        "APPEND": _load_append,
        "APPENDS": _load_appends,
        "EMPTY_TUPLE": _load_empty_tuple,
        "TUPLE": _load_tuple,
        "TUPLE1": _load_tuple1,
        "TUPLE2": _load_tuple2,
        "TUPLE3": _load_tuple3,
        "PUT": _load_put,
        "BINPUT": _load_put,
        "LONG_BINPUT": _load_put,
        "MEMOIZE": _load_memoize,
        "GET": _load_get,
        "BINGET": _load_get,
        "LONG_BINGET": _load_get,
    }


class PickleSessionSerializer(SessionSerializer):
    """Decode pickled session dicts without importing or calling anything."""

    kind = Serializer.PICKLE

    def loads(self, data: bytes) -> Session:
        return normalize_session(RestrictedUnpickler(data).load())
