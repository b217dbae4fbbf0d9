from dataclasses import dataclass


@dataclass
class Ok[T]:
    value: T

    def ok(self) -> T:
        return self.value


@dataclass
class Err[E]:
    error: E

    def ok(self) -> None:
        return None


type Result[T, E] = Ok[T] | Err[E]
