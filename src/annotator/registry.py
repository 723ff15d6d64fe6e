"""Behavior label registry: the fixed set of labels a span may carry."""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from typing import Any, Iterable, Sequence

from pydantic import BaseModel, ValidationError

from .models import InvalidArgumentError


class BehaviorModel(BaseModel):
    name: str
    description: str = ""


@dataclass(frozen=True)
class BehaviorLabel:
    """Describe a cognitive behavior a reviewer can attach to a span."""

    name: str
    description: str = ""


class BehaviorRegistry:
    """Ordered, duplicate-free collection of behavior labels."""

    def __init__(self, behaviors: Iterable[BehaviorLabel] | None = None) -> None:
        self._behaviors: list[BehaviorLabel] = []
        for behavior in behaviors or []:
            self.register(name=behavior.name, description=behavior.description)

    def register(self, *, name: str, description: str = "") -> BehaviorLabel:
        if not name.strip():
            raise InvalidArgumentError("Behavior name must not be empty")
        if name in self:
            raise InvalidArgumentError(f"Behavior '{name}' is already registered")
        behavior = BehaviorLabel(name=name, description=description)
        self._behaviors.append(behavior)
        return behavior

    def behaviors(self) -> Sequence[BehaviorLabel]:
        return tuple(self._behaviors)

    def labels(self) -> tuple[str, ...]:
        return tuple(behavior.name for behavior in self._behaviors)

    def default_label(self) -> str:
        if not self._behaviors:
            raise LookupError("Behavior registry is empty")
        return self._behaviors[0].name

    def resolve(self, choice: str | int) -> str:
        """Map a label or a 1-based menu position to a registered label."""

        if isinstance(choice, int) or (isinstance(choice, str) and choice.strip().isdecimal()):
            position = int(choice)
            if 1 <= position <= len(self._behaviors):
                return self._behaviors[position - 1].name
            raise InvalidArgumentError(f"Behavior number must be between 1 and {len(self._behaviors)}")

        label = choice.strip()
        for name in self.labels():
            if name.lower() == label.lower():
                return name
        raise InvalidArgumentError(f"Unknown behavior '{choice}'")

    def __contains__(self, name: object) -> bool:
        return any(behavior.name == name for behavior in self._behaviors)

    def __len__(self) -> int:
        return len(self._behaviors)

    @classmethod
    def with_default_behaviors(cls) -> "BehaviorRegistry":
        """Load registry defaults from the packaged JSON resource."""

        return cls._from_resource("default_behaviors.json")

    @classmethod
    def from_json(cls, path: str) -> "BehaviorRegistry":
        """Create a registry from a JSON file on disk."""

        with open(path, "r", encoding="utf-8") as handle:
            specs = json.load(handle)
        return cls._from_specs(specs)

    @classmethod
    def _from_resource(cls, resource_name: str) -> "BehaviorRegistry":
        try:
            data = resources.files(__package__).joinpath(resource_name).read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"Cannot locate registry resource '{resource_name}'") from exc
        specs = json.loads(data)
        return cls._from_specs(specs)

    @classmethod
    def _from_specs(cls, specs: Iterable[dict[str, Any] | str]) -> "BehaviorRegistry":
        registry = cls()
        for spec in specs:
            # A bare string is shorthand for a label without a description.
            payload = {"name": spec} if isinstance(spec, str) else spec
            try:
                model = BehaviorModel.model_validate(payload)
            except ValidationError as exc:
                raise ValueError(f"Behavior definition is invalid: {exc}") from exc
            registry.register(name=model.name, description=model.description)
        return registry


DEFAULT_BEHAVIOR_REGISTRY = BehaviorRegistry.with_default_behaviors()
