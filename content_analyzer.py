"""Page content signals: risky forms, urgency wording and brand impersonation.

Findings here are reported next to the URL assessment; they do not change
its score or risk level.
"""

from __future__ import annotations

import logging
from typing import List, Tuple
from urllib.parse import urljoin

from models import ContentAnalysis, FormAnalysis, PageFeatures
from url_features import parse_url
import signal_catalog as catalog

logger = logging.getLogger(__name__)


def _page_origin(page: PageFeatures) -> Tuple[str, str]:
    try:
        parsed = parse_url(page.url or "")
    except (ValueError, AttributeError):
        return "", ""
    return parsed["scheme"], parsed["host"]


def analyze_form_fields(page: PageFeatures) -> FormAnalysis:
    """Inspect the page's forms for credential collection risks."""
    scheme, page_host = _page_origin(page)
    is_secure = scheme == "https"
    has_password_field = False
    has_sensitive_fields = False
    submit_url = None
    issues: List[str] = []

    for form in page.forms:
        if form.action:
            submit_url = form.action
            try:
                # relative actions submit to the page's own origin
                submit_url = urljoin(page.url or "", form.action)
                form_host = parse_url(submit_url)["host"]
            except ValueError:
                logger.debug("Unparseable form action %r on %s", form.action, page.url)
                issues.append(catalog.INVALID_FORM_ACTION)
            else:
                if form_host != page_host:
                    issues.append(catalog.FOREIGN_FORM_ACTION.format(host=form_host))

        for field in form.inputs:
            if (field.type or "").lower() == "password":
                has_password_field = True
            name = field.name or ""
            field_id = field.id or ""
            if any(term.matches(name) or term.matches(field_id) for term in catalog.SENSITIVE_FORM_FIELDS):
                has_sensitive_fields = True

    if has_password_field and not is_secure:
        issues.append(catalog.INSECURE_PASSWORD_FIELD)

    return FormAnalysis(
        has_password_field=has_password_field,
        has_sensitive_fields=has_sensitive_fields,
        submit_url=submit_url,
        is_secure=is_secure,
        issues=tuple(issues),
    )


def analyze_content(page: PageFeatures) -> ContentAnalysis:
    """Look for urgency language and logos of brands the host does not belong to."""
    text = (page.visible_text or "").lower()
    issues: List[str] = []

    urgency_language = False
    for phrase in catalog.URGENCY_PHRASES:
        if phrase.matches(text):
            urgency_language = True
            issues.append(phrase.describe())

    # a list, not a set: one entry per image and brand that matched
    brands_found: List[str] = []
    for image in page.images:
        for brand in catalog.IMPERSONATED_BRANDS:
            if brand.matches(image.alt or "") or brand.matches(image.src or ""):
                brands_found.append(brand.pattern)

    brand_impersonation = False
    if brands_found:
        _, host = _page_origin(page)
        if not any(brand.replace(" ", "") in host for brand in brands_found):
            brand_impersonation = True
            issues.append(catalog.BRAND_IMPERSONATION.format(brands=", ".join(brands_found)))

    return ContentAnalysis(
        urgency_language=urgency_language,
        brand_impersonation=brand_impersonation,
        brands_found=tuple(brands_found),
        issues=tuple(issues),
    )
