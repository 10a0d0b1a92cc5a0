"""Known AI agent signatures (NOT user-configurable)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AgentSignature:
    """Static fingerprint of one agent.

    Attributes:
        name: Display name reported in attribution results.
        package_prefixes: Qualified-namespace prefixes; a frame living under one is a high-confidence match.
        type_name_fragments: Lowercase substrings of a type name; a medium-confidence match.
    """

    name: str
    package_prefixes: tuple[str, ...]
    type_name_fragments: tuple[str, ...] = ()

    def matches_package(self, type_name: str) -> bool:
        lowered = type_name.lower()
        return any(lowered.startswith(prefix.lower()) for prefix in self.package_prefixes)

    def matches_fragment(self, type_name: str) -> bool:
        lowered = type_name.lower()
        return any(fragment in lowered for fragment in self.type_name_fragments)


# Registry order is the tie-break order.
AGENT_SIGNATURES: tuple[AgentSignature, ...] = (
    AgentSignature(
        name="GitHub Copilot",
        package_prefixes=("com.github.copilot",),
        type_name_fragments=("copilot",),
    ),
    AgentSignature(
        name="Augment Code",
        package_prefixes=("com.augment", "co.augment"),
        type_name_fragments=("augment",),
    ),
    AgentSignature(
        name="Tabnine",
        package_prefixes=("com.tabnine",),
        type_name_fragments=("tabnine",),
    ),
    AgentSignature(
        name="Codeium",
        package_prefixes=("com.codeium",),
        type_name_fragments=("codeium",),
    ),
    AgentSignature(
        name="AWS CodeWhisperer",
        package_prefixes=("software.aws.toolkits", "software.amazon.awssdk"),
        type_name_fragments=("codewhisperer", "amazonq"),
    ),
    AgentSignature(
        name="JetBrains AI Assistant",
        package_prefixes=("com.intellij.ml", "com.jetbrains.ml"),
        type_name_fragments=("aiassistant", "mlcode"),
    ),
    AgentSignature(
        name="Cursor",
        package_prefixes=("com.cursor",),
        type_name_fragments=("cursor",),
    ),
    AgentSignature(
        name="Sourcegraph Cody",
        package_prefixes=("com.sourcegraph",),
        type_name_fragments=("cody", "sourcegraph"),
    ),
    AgentSignature(
        name="Continue",
        package_prefixes=("com.continue",),
        type_name_fragments=("continue",),
    ),
)
