"""Core modules for the scaffolding engine.

- exceptions: error taxonomy
- classifier: ordered family signature table
- resolver: raw chip name to Chip
- plan: Directive / BuildPlan / TemplateSelection value types
- derivation: Chip + user choices to BuildPlan
"""

from embassy_init.core.classifier import (
    ClassifierTable,
    CoreRule,
    FamilySignature,
    default_table,
)
from embassy_init.core.derivation import derive, select_templates
from embassy_init.core.plan import BuildPlan, Directive, TemplateSelection
from embassy_init.core.resolver import ChipResolver, normalize_chip_name

__all__ = [
    "ClassifierTable",
    "CoreRule",
    "FamilySignature",
    "default_table",
    "ChipResolver",
    "normalize_chip_name",
    "BuildPlan",
    "Directive",
    "TemplateSelection",
    "derive",
    "select_templates",
]
