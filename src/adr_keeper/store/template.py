"""
Record templates

Built-in default template, store override loading and placeholder rendering.
"""

import re

from adr_keeper.config import StoreConfig
from adr_keeper.logging_config import get_logger

logger = get_logger("store.template")


PLACEHOLDERS = ("number", "title", "status", "date")

_PLACEHOLDER_RE = re.compile(r"\{\{(" + "|".join(PLACEHOLDERS) + r")\}\}")


DEFAULT_TEMPLATE = """# ADR {{number}}: {{title}}

**Status**: {{status}}  
**Date**: {{date}}

---

## Context

Describe the problem, need, or motivation for this decision. Include the current scenario, technical or business constraints, and the factors influencing the choice.

## Decision

Clearly state the decision made. For example:

> We decided to adopt the XYZ framework for developing REST APIs in the ABC project.

## Considered Alternatives

- **Alternative A** (chosen): reasons for the choice...
- **Alternative B**: reasons for not choosing...
- **Alternative C**: pros and cons...

## Consequences

Explain the impacts of this decision:

- Immediate or long-term benefits
- Possible risks or side effects
- Actions required to implement the decision

## Relations

- Replaces ADR: 'adr-XXX.md' _(if applicable)_
- Replaced by ADR: 'adr-XXX.md' _(if applicable)_
- Related to: issues, RFCs, previous decisions

---

_This ADR follows the model of [Joel Parker Henderson](https://github.com/joelparkerhenderson/architecture-decision-record)_
"""


def render_template(template: str, number: str, status: str, title: str, date: str) -> str:
    """Replace every placeholder occurrence in a single pass.

    Substituted values are not scanned again, so a title containing
    "{{date}}" stays literal. Unknown tokens pass through untouched.
    """
    values = {"number": number, "status": status, "title": title, "date": date}
    return _PLACEHOLDER_RE.sub(lambda match: values[match.group(1)], template)


def load_template(config: StoreConfig) -> str:
    """Return the store's template override, or the built-in default."""
    path = config.template_path
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("No usable template at %s, using default", path)
        return DEFAULT_TEMPLATE
    logger.debug("Using template override %s", path)
    return content
