"""Markdown detail views for ENS lookup results.

Every function here consumes a ResolutionResult and nothing flows back into the
resolution workflow. The detail view is rendered from a Jinja2 template shipped
with the package.
"""

from dataclasses import dataclass
from typing import List, Tuple

import jinja2

from social.graze.enslookup.model.result import TEXT_RECORD_KEYS, ResolutionResult

ETHERSCAN_ADDRESS_URL = "https://etherscan.io/address/{address}"

# Records shown in the header of the detail view rather than under "Other Details".
PROFILE_KEYS = frozenset(
    {"avatar", "com.twitter", "com.github", "com.discord", "website", "url", "description"}
)

_environment = jinja2.Environment(
    loader=jinja2.PackageLoader("social.graze.enslookup.present", "templates"),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


@dataclass(frozen=True)
class ProfileLink:
    title: str
    url: str
    icon: str


@dataclass(frozen=True)
class ResultAction:
    """
    A user action offered next to a result.

    Attributes:
        kind: Either "copy" (copy value to the clipboard) or "open" (open value in a browser)
        title: Label shown to the user
        value: Text to copy or URL to open
    """

    kind: str
    title: str
    value: str


def _handle(value: str) -> str:
    return value.removeprefix("@")


def profile_links(result: ResolutionResult) -> List[ProfileLink]:
    """Social and website links published in the result's text records."""
    records = result.text_records
    links: List[ProfileLink] = []

    twitter = records.get("com.twitter")
    if twitter:
        links.append(
            ProfileLink("Twitter", f"https://twitter.com/{_handle(twitter)}", "🐦")
        )

    github = records.get("com.github")
    if github:
        links.append(
            ProfileLink("GitHub", f"https://github.com/{_handle(github)}", "💻")
        )

    discord = records.get("com.discord")
    if discord:
        links.append(
            ProfileLink("Discord", f"https://discord.com/users/{discord}", "💬")
        )

    if result.website:
        links.append(ProfileLink("Website", result.website, "🌐"))

    return links


def secondary_records(result: ResolutionResult) -> List[Tuple[str, str]]:
    """Non-empty records that are not part of the profile header, in key order."""
    return [
        (key, value)
        for key in TEXT_RECORD_KEYS
        if key not in PROFILE_KEYS and (value := result.text_records.get(key))
    ]


def result_actions(result: ResolutionResult) -> List[ResultAction]:
    """Copy and open actions for a successful result."""
    if result.error is not None:
        return []

    actions: List[ResultAction] = []
    address = result.display_address
    name = result.display_name

    if address:
        actions.append(ResultAction("copy", "Copy Address", address))
    if name:
        actions.append(ResultAction("copy", "Copy ENS Name", name))
    if address:
        actions.append(
            ResultAction(
                "open",
                "View on Etherscan",
                ETHERSCAN_ADDRESS_URL.format(address=address),
            )
        )

    for link in profile_links(result):
        actions.append(ResultAction("open", f"Open {link.title}", link.url))

    for key, value in secondary_records(result):
        actions.append(ResultAction("copy", f"Copy {key}", value))

    return actions


def render_markdown(result: ResolutionResult) -> str:
    """Render the detail view for a result.

    Errors render as the query in bold followed by the error message. Successful
    lookups render the avatar, name, address, content hash, profile links,
    description and any other records.
    """
    template = _environment.get_template("detail.md.j2")
    return template.render(
        query=result.query,
        error_message=result.error_message,
        avatar=result.text_records.get("avatar"),
        name=result.display_name,
        address=result.display_address,
        content_hash=result.content_hash,
        links=profile_links(result),
        description=result.text_records.get("description"),
        other_details=secondary_records(result),
    )


def render_summary(result: ResolutionResult) -> str:
    """One line summary, e.g. ``vitalik.eth -> 0xd8dA...``."""
    if result.error is not None:
        return f"{result.query}: {result.error_message}"

    if result.primary_address is not None:
        summary = f"{result.query} -> {result.primary_address}"
    else:
        summary = f"{result.query} -> {result.primary_name}"

    records = sum(1 for value in result.text_records.values() if value is not None)
    if records > 0:
        summary += f" ({records} records)"
    return summary
