# src/netlify_config/redirects_file.py — v1
"""Write generated redirect and rewrite rules to the _redirects side file.

Generated content starts with HEADER_COMMENT. A pre-existing file that
lacks the marker was authored by the user, so new rules are appended
to it rather than replacing it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from buildcore.storage import layout
from buildcore.storage.base_file_store import BaseFileStore

logger = logging.getLogger(__name__)

HEADER_COMMENT = "## Created with netlify functions plugin"
RULE_SEPARATOR = "  "


class RedirectRule(BaseModel):
    """A redirect rule; unrecognized keys go to ``extra`` as key=value pairs."""

    from_path: str
    to_path: str
    is_permanent: bool = False
    force: bool = False
    status_code: int | str | None = None
    redirect_in_browser: bool | None = None
    extra: dict[str, Any] = Field(default_factory=dict)


class Rewrite(BaseModel):
    """A 200 rewrite, e.g. a public path onto a serverless function."""

    from_path: str
    to_path: str


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_redirect(rule: RedirectRule) -> str:
    """Render ``from  to  status[!][  key=value ...]``.

    The order of the first three fields is significant; key=value pairs
    follow in insertion order. Values containing spaces are dropped.
    """
    status = "301" if rule.is_permanent else "302"
    if rule.status_code:
        status = str(rule.status_code)
    if rule.force:
        status = f"{status}!"

    pieces = [rule.from_path, rule.to_path, status]
    for key, value in rule.extra.items():
        rendered = _format_value(value)
        if " " in rendered:
            logger.warning(
                'Invalid redirect value "%s" specified for key "%s". '
                "Values should not contain spaces.",
                rendered,
                key,
            )
            continue
        pieces.append(f"{key}={rendered}")
    return RULE_SEPARATOR.join(pieces)


def format_rewrite(rewrite: Rewrite) -> str:
    return RULE_SEPARATOR.join([rewrite.from_path, rewrite.to_path, "200"])


def render_redirects(redirects: list[RedirectRule], rewrites: list[Rewrite]) -> str:
    lines = [format_redirect(r) for r in redirects] + [format_rewrite(r) for r in rewrites]
    return f"{HEADER_COMMENT}\n\n" + "\n".join(lines)


async def write_redirects_file(
    store: BaseFileStore,
    publish_dir: Path,
    redirects: list[RedirectRule],
    rewrites: list[Rewrite],
) -> Path | None:
    """Write generated rules to {publish_dir}/_redirects.

    Args:
        store: File store backend.
        publish_dir: Directory that receives the _redirects file.
        redirects: Redirect rules, written first.
        rewrites: Rewrite rules, written after the redirects.

    Returns:
        Path written to, or None when there was nothing to write.
    """
    if not redirects and not rewrites:
        return None

    path = Path(publish_dir) / layout.REDIRECTS_FILENAME
    data = render_redirects(redirects, rewrites)

    append = False
    if await store.exists(path):
        existing = await store.read_text(path)
        append = HEADER_COMMENT not in existing

    if append:
        logger.info("Appending %d generated rules to user-authored %s",
                    len(redirects) + len(rewrites), path)
        await store.append_text(path, f"\n\n{data}")
    else:
        await store.write_text(path, data)
    return path
