"""Manufacturers and their models, offered as choices on asset forms."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Model:
    id: str
    name: str


@dataclass(frozen=True)
class Manufacturer:
    """A manufacturer and the models it offers."""

    id: str
    name: str
    models: tuple[Model, ...] = ()
    used_by_categories: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "models", tuple(self.models))
        object.__setattr__(self, "used_by_categories", tuple(self.used_by_categories))

    def get_model(self, model_id: str) -> Model | None:
        for model in self.models:
            if model.id == model_id:
                return model
        return None

    def with_model(self, model: Model) -> Manufacturer:
        return replace(self, models=self.models + (model,))

    def renamed_model(self, model_id: str, name: str) -> Manufacturer:
        return replace(
            self,
            models=tuple(replace(m, name=name) if m.id == model_id else m for m in self.models),
        )

    def without_model(self, model_id: str) -> Manufacturer:
        return replace(self, models=tuple(m for m in self.models if m.id != model_id))
