from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EventTypeTemplate:
    event_type: str
    shares: dict[str, float]  # category -> fraction of total; need not sum to 1.0
    must_have: tuple[str, ...] = ()
    nice_to_have: tuple[str, ...] = ()


@dataclass(frozen=True)
class TemplateCatalog:
    templates: dict[str, EventTypeTemplate] = field(default_factory=dict)

    def get(self, event_type: str | None) -> EventTypeTemplate | None:
        if not event_type:
            return None
        return self.templates.get(event_type.strip().lower())

    def shares_for(self, event_type: str | None) -> dict[str, float]:
        template = self.get(event_type)
        return dict(template.shares) if template else {}

    def event_types(self) -> list[str]:
        return list(self.templates)


def default_template_catalog() -> TemplateCatalog:
    return TemplateCatalog(
        templates={
            "wedding": EventTypeTemplate(
                event_type="wedding",
                shares={
                    "venue": 0.30,
                    "catering": 0.25,
                    "photography": 0.12,
                    "flowers": 0.08,
                    "music": 0.07,
                    "misc": 0.18,
                },
                must_have=("venue", "catering", "photography"),
                nice_to_have=("flowers", "music", "misc"),
            ),
            "birthday": EventTypeTemplate(
                event_type="birthday",
                shares={
                    "venue": 0.20,
                    "catering": 0.30,
                    "entertainment": 0.20,
                    "decor": 0.10,
                    "misc": 0.20,
                },
                must_have=("venue", "catering", "entertainment"),
                nice_to_have=("decor", "misc"),
            ),
        }
    )
