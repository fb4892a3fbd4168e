from typing import List, Optional, Protocol


class TraceSink(Protocol):
    def record(self, line: str) -> None:
        ...


class StepTrace:
    """Ordered, append-only list of narration lines."""

    def __init__(self):
        self.lines: List[str] = []

    def record(self, line: str) -> None:
        self.lines.append(line)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index):
        return self.lines[index]


class _NullTrace:
    def record(self, line: str) -> None:
        pass


NULL_TRACE = _NullTrace()


def sink_or_null(trace: Optional[TraceSink]) -> TraceSink:
    return NULL_TRACE if trace is None else trace


def record_result(trace: TraceSink, result: str) -> str:
    trace.record(f'Final result: "{result}"')
    return result
