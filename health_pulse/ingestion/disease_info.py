"""
HealthPulse — Довідник хвороб

Описи, варіанти лікування та запобіжні заходи для показу результатів.
У скорингу не використовуються. Відсутні дані замінюються значеннями
за замовчуванням, помилкою це не вважається.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


DEFAULT_TREATMENT = "Consult a healthcare professional."
DEFAULT_DESCRIPTION = "No description available."


@dataclass
class DiseaseInfo:
    """Довідкова інформація про хворобу"""
    description: Optional[str] = None
    treatments: str = DEFAULT_TREATMENT
    precautions: List[str] = field(default_factory=list)

    @property
    def has_description(self) -> bool:
        return bool(self.description and self.description != DEFAULT_DESCRIPTION)


class DiseaseInfoCatalog:
    """
    Довідник хвороб з пошуком без урахування регістру.

    Приклад використання:
        catalog = DiseaseInfoCatalog(
            metadata={"influenza": {"description": "...", "treatments": "Rest"}},
            precautions={"influenza": ["drink fluids", "rest"]}
        )
        info = catalog.get("Influenza")
        print(info.treatments)
    """

    def __init__(
        self,
        metadata: Optional[Dict[str, Dict[str, Optional[str]]]] = None,
        precautions: Optional[Dict[str, List[str]]] = None
    ):
        self._metadata = {k.strip().lower(): v for k, v in (metadata or {}).items()}
        self._precautions = {k.strip().lower(): list(v) for k, v in (precautions or {}).items()}

    def get(self, disease: str) -> DiseaseInfo:
        """Отримати інформацію (значення за замовчуванням, якщо хвороби немає)"""
        key = disease.strip().lower()
        meta = self._metadata.get(key) or {}
        return DiseaseInfo(
            description=meta.get("description") or None,
            treatments=meta.get("treatments") or DEFAULT_TREATMENT,
            precautions=list(self._precautions.get(key, [])),
        )

    def has_disease(self, disease: str) -> bool:
        key = disease.strip().lower()
        return key in self._metadata or key in self._precautions

    def __len__(self) -> int:
        return len(set(self._metadata) | set(self._precautions))

    def __repr__(self) -> str:
        return (
            f"DiseaseInfoCatalog(metadata={len(self._metadata)}, "
            f"precautions={len(self._precautions)})"
        )
