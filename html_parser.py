from __future__ import annotations

import logging
from typing import List
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from config import get_settings
from content_analyzer import analyze_content, analyze_form_fields
from models import FormFeatures, ImageFeatures, InputField, PageFeatures, PageReport

logger = logging.getLogger(__name__)

# Elements whose text never renders
INVISIBLE_TAGS = ["script", "style", "noscript", "template"]


def fetch_page(url: str) -> requests.Response:
    settings = get_settings()
    headers = {"User-Agent": settings.user_agent}
    return requests.get(
        url,
        timeout=settings.request_timeout,
        headers=headers,
        allow_redirects=True,
    )


def extract_page_features(html: str, page_url: str) -> PageFeatures:
    """
    Reduce an HTML document to the features the content analyzers read:
      - forms (resolved action URL and input type/name/id)
      - visible text of the body
      - images (alt text and resolved src)
    """
    soup = BeautifulSoup(html or "", "html.parser")

    forms: List[FormFeatures] = []
    for form in soup.find_all("form"):
        action = (form.get("action") or "").strip()
        if action:
            action = urljoin(page_url, action)
        inputs = tuple(
            InputField(
                type=(inp.get("type") or "text").lower(),
                name=inp.get("name") or "",
                id=inp.get("id") or "",
            )
            for inp in form.find_all("input")
        )
        forms.append(FormFeatures(action=action, inputs=inputs))

    images = tuple(
        ImageFeatures(
            alt=img.get("alt") or "",
            src=urljoin(page_url, img.get("src")) if img.get("src") else "",
        )
        for img in soup.find_all("img")
    )

    body = soup.body or soup
    for tag in body.find_all(INVISIBLE_TAGS):
        tag.decompose()
    text = body.get_text(separator=" ", strip=True)

    return PageFeatures(url=page_url, forms=tuple(forms), visible_text=text, images=images)


def analyze_page(url: str) -> PageReport:
    """Fetch a page and run the form and content analyzers over it."""
    try:
        r = fetch_page(url)
    except requests.RequestException as exc:
        logger.warning("Fetching %s failed: %s", url, exc)
        return PageReport(url=url, error="request_failed")

    if r.status_code >= 400:
        logger.info("Fetching %s returned HTTP %s", url, r.status_code)
        return PageReport(url=url, status_code=r.status_code, final_url=r.url)

    page = extract_page_features(r.text, r.url)
    return PageReport(
        url=url,
        form=analyze_form_fields(page),
        content=analyze_content(page),
        status_code=r.status_code,
        final_url=r.url,
    )
