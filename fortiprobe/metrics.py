"""Metric descriptors, constant samples, data fetching and text exposition."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Protocol


class ValueType(enum.Enum):
    """Kind of a metric sample."""

    GAUGE = "gauge"
    COUNTER = "counter"


class ProbeError(Exception):
    """Raised when a probe cannot fetch or read the data it needs."""


class FortiClient(Protocol):
    """Anything that can fetch a decoded JSON document from a FortiGate API path."""

    def get(self, path: str, query: str) -> Any:
        ...


@dataclass(frozen=True)
class Desc:
    """Name, help text and label names shared by a family of samples."""

    name: str
    help: str
    label_names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        names = tuple(self.label_names)
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate label names in {self.name}: {names}")
        object.__setattr__(self, "label_names", names)

    def new_metric(self, value_type: ValueType | str, value: float, *args: Any) -> Metric:
        """Create a constant sample with one label value per label name."""
        if len(args) != len(self.label_names):
            raise ValueError(
                f"{self.name}: expected {len(self.label_names)} label values, got {len(args)}"
            )
        return Metric(
            desc=self,
            value_type=ValueType(value_type),
            value=float(value),
            label_values=tuple(str(arg) for arg in args),
        )


@dataclass(frozen=True)
class Metric:
    """A single constant sample."""

    desc: Desc
    value_type: ValueType
    value: float
    label_values: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.desc.name

    def label_pairs(self) -> tuple[tuple[str, str], ...]:
        """Return the (name, value) label pairs sorted by label name."""
        return tuple(sorted(zip(self.desc.label_names, self.label_values)))


def fetch(client: FortiClient, path: str, query: str) -> Any:
    """Fetch a document from the client, turning any failure into ProbeError."""
    try:
        return client.get(path, query)
    except ProbeError:
        raise
    except Exception as exc:
        raise ProbeError(f"{path}: {exc}") from exc


def _format_value(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    point = len(digits) + exponent
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{sign}{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{sign}{digits}{'0' * (point - len(digits))}"
    return f"{sign}{digits[:point]}.{digits[point:]}"


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _escape_label(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _sample_line(metric: Metric) -> str:
    pairs = metric.label_pairs()
    value = _format_value(metric.value)
    if not pairs:
        return f"{metric.name} {value}"
    labels = ",".join(f'{name}="{_escape_label(val)}"' for name, val in pairs)
    return f"{metric.name}{{{labels}}} {value}"


def render(metrics: Iterable[Metric]) -> str:
    """Render samples in the Prometheus text exposition format, sorted by name and labels."""
    families: dict[str, list[Metric]] = {}
    for metric in metrics:
        families.setdefault(metric.name, []).append(metric)

    lines: list[str] = []
    for name in sorted(families):
        members = families[name]
        first = members[0]
        seen: set[tuple[tuple[str, str], ...]] = set()
        for metric in members:
            if (metric.desc.help, metric.value_type) != (first.desc.help, first.value_type):
                raise ValueError(f"inconsistent help or type for metric family {name}")
            key = metric.label_pairs()
            if key in seen:
                raise ValueError(f"duplicate sample {name} {dict(key)}")
            seen.add(key)
        lines.append(f"# HELP {name} {_escape_help(first.desc.help)}")
        lines.append(f"# TYPE {name} {first.value_type.value}")
        ordered = sorted(members, key=lambda m: tuple(v for _, v in m.label_pairs()))
        lines.extend(_sample_line(metric) for metric in ordered)
    return "".join(line + "\n" for line in lines)