"""
Help topics for the adr-keeper CLI.

Provides detailed help accessible via 'adr-keeper help <topic>'.
"""

from typing import List, Tuple, Optional


HELP_TOPICS = {
    "template": {
        "description": "Customizing the ADR template",
        "content": """
[bold]ADR Templates[/bold]

New records are rendered from [cyan]template.md[/cyan] in the store directory,
or from the built-in template when that file does not exist.

[bold cyan]Placeholders:[/bold cyan]
  {{number}}   - Sequence number, e.g. 007
  {{title}}    - Title as typed
  {{status}}   - Initial status
  {{date}}     - Creation date (YYYY-MM-DD)

Placeholders may repeat or be left out. Unknown tokens are kept as-is.

[bold cyan]Status lines:[/bold cyan]
Keep a line starting with [cyan]**Status**:[/cyan] so later updates can track
the status history. The first line starting with '# ' is the title heading.
"""
    },

    "statuses": {
        "description": "Status values and history",
        "content": """
[bold]ADR Status[/bold]

[bold cyan]Suggested values:[/bold cyan]
  Proposed, Accepted, Rejected, Deprecated, Superseded

Any other single-line label is accepted too.

[bold cyan]History:[/bold cyan]
Changing the status rewrites the [cyan]**Status**:[/cyan] line and records the
old value in a [cyan]**Previous Status**:[/cyan] line right below it. Setting
the same status again changes nothing.

[bold cyan]Examples:[/bold cyan]
  adr-keeper record -n 3 -s Accepted
  adr-keeper record -n 3 -s Superseded
"""
    },

    "store": {
        "description": "Where records live and how they are named",
        "content": """
[bold]The Record Store[/bold]

  docs/adr/
  ├── README.md                    # Generated index, do not edit
  ├── template.md                  # Optional template override
  ├── adr-001-use-postgres.md
  └── adr-002-adopt-event-sourcing.md

Filenames are [cyan]adr-<number>-<slug>.md[/cyan]. Changing a title renames the
file. The index is rebuilt after every change; run [cyan]adr-keeper reindex[/cyan]
to regenerate it by hand.

[bold cyan]Choosing the directory:[/bold cyan]
  --dir PATH                  # Per command
  ADR_KEEPER_DIR=PATH         # Environment
  store_dir: PATH             # In .adr-keeper.yaml
"""
    },
}


def list_topics() -> List[Tuple[str, str]]:
    """List all help topics with descriptions.

    Returns:
        List of (topic_name, description) tuples
    """
    return [(name, data["description"]) for name, data in HELP_TOPICS.items()]


def get_help_content(topic: str) -> Optional[str]:
    """Get help content for a topic (case-insensitive), or None."""
    topic_data = HELP_TOPICS.get(topic.lower())
    return topic_data["content"] if topic_data else None


def get_topic_names() -> List[str]:
    return list(HELP_TOPICS.keys())
