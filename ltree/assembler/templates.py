"""
Assembling templates for locales that do not have the file yet.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..config import AssemblySettings
from ..types import FileDescriptor

# Boilerplate per file stem; the reference locale is en-US
BUILTIN_TEMPLATES: Dict[str, str] = {
    "translation": (
        'import type { Locale } from "~/locales/types";\n\n'
        "export default {} satisfies Locale;\n"
    ),
    "tags": (
        'import type tags from "~/locales/en-US/tags";\n\n'
        "export default {} satisfies typeof tags;\n"
    ),
    "about": (
        'import type { AboutUsProps } from "~/locales/en-US/about";\n\n'
        "export const AboutUs = (props: AboutUsProps) => ``;\n"
    ),
    "terms": (
        'import type { TermsProps } from "~/locales/en-US/terms";\n\n'
        "export const TermsOfUse = (props: TermsProps) => ``;\n"
    ),
    "security": (
        'import type { SecurityProps } from "~/locales/en-US/legal/security";\n\n'
        "export const SecurityNotice = (props: SecurityProps) => ``;\n"
    ),
    "rules": (
        'import type { RulesProps } from "~/locales/en-US/legal/rules";\n\n'
        "export const Rules = (props: RulesProps) => ``;\n"
    ),
    "privacy": (
        'import type { PrivacyProps } from "~/locales/en-US/legal/privacy";\n\n'
        "export const PrivacyPolicy = (props: PrivacyProps) => ``;\n"
    ),
    "copyright": (
        'import type { CopyrightProps } from "~/locales/en-US/legal/copyright";\n\n'
        "export const CopyrightPolicy = (props: CopyrightProps) => ``;\n"
    ),
}


def resolve_template(desc: FileDescriptor, existing_text: Optional[str], settings: AssemblySettings) -> Optional[str]:
    """
    Text to splice the translation into.

    The locale's own file wins, then a boilerplate for the file stem
    (configured ones over built-ins), then the configured fallback.
    None when nothing is available.
    """
    if existing_text is not None:
        return existing_text

    templates = {**BUILTIN_TEMPLATES, **settings.templates}
    template = templates.get(desc.stem)
    if template is not None:
        return template

    return settings.fallback_template or None


__all__ = ["BUILTIN_TEMPLATES", "resolve_template"]
