"""Consumer/processor/producer scaffolding shared by CLI commands."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Protocol, TypeVar


PayloadT = TypeVar("PayloadT")
ResultT = TypeVar("ResultT")


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[Dict[str, Any]] = None

    def ok(self) -> bool:
        return self.status.lower() == "success"

    def unwrap(self) -> ResultT:
        """Return payload or raise ValueError. Use after ok() check."""
        if self.payload is None:
            msg = (self.diagnostics or {}).get("message", "No payload")
            raise ValueError(msg)
        return self.payload

    @classmethod
    def success(cls, payload: ResultT) -> "ResultEnvelope[ResultT]":
        return cls(status="success", payload=payload)

    @classmethod
    def error(cls, message: str, code: int = 1, **extra: Any) -> "ResultEnvelope[ResultT]":
        return cls(status="error", diagnostics={"message": message, "code": code, **extra})

    def exit_code(self) -> int:
        if self.ok():
            return 0
        return int((self.diagnostics or {}).get("code", 1))


class Consumer(Protocol[PayloadT]):
    def consume(self) -> PayloadT:
        ...


class Processor(Protocol[PayloadT, ResultT]):
    def process(self, payload: PayloadT) -> ResultT:
        ...


class Producer(Protocol[ResultT]):
    def produce(self, result: ResultT) -> None:
        ...
