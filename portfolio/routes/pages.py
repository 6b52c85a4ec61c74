"""
Page Routes

HTML pages of the site. Every handler delegates to PageService, which the
static build also uses, so served and built pages are identical.

GET  /                  → About (home)
GET  /blog              → first page of the archive
GET  /blog/page/{page}  → later archive pages
GET  /blog/{slug}       → single post
GET  /tags              → tag taxonomy
GET  /tags/{tag}        → posts carrying a tag
GET  /resume            → resume
GET  /contact           → contact form
POST /contact           → server-side relay (only when enabled)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from portfolio.constants.site import CONTACT_FAILURE_MESSAGE, CONTACT_SUCCESS_MESSAGE
from portfolio.exceptions import ContactRelayError, ContactValidationError, PageNotFoundError
from portfolio.schemas.contact import ContactMessage
from portfolio.services.contact_service import ContactService
from portfolio.services.page_service import PageService

router = APIRouter(tags=["Pages"])
logger = logging.getLogger(__name__)


def get_page_service(request: Request) -> PageService:
    return request.app.state.pages


def get_contact_service(request: Request) -> ContactService | None:
    return getattr(request.app.state, "contact", None)


@router.get("/", response_class=HTMLResponse)
def home(pages: PageService = Depends(get_page_service)) -> HTMLResponse:
    return HTMLResponse(pages.home())


@router.get("/blog", response_class=HTMLResponse)
def blog(pages: PageService = Depends(get_page_service)) -> HTMLResponse:
    return HTMLResponse(pages.blog(1))


@router.get("/blog/page/{page}", response_class=HTMLResponse)
def blog_page(page: str, pages: PageService = Depends(get_page_service)) -> HTMLResponse:
    number = int(page) if page.isascii() and page.isdigit() else 0
    # /blog/page/1 is served at /blog only
    if number < 2 or str(number) != page:
        raise PageNotFoundError(f"blog page {page}")
    return HTMLResponse(pages.blog(number))


@router.get("/blog/{slug}", response_class=HTMLResponse)
def blog_post(slug: str, pages: PageService = Depends(get_page_service)) -> HTMLResponse:
    return HTMLResponse(pages.post(slug))


@router.get("/tags", response_class=HTMLResponse)
def tags(pages: PageService = Depends(get_page_service)) -> HTMLResponse:
    return HTMLResponse(pages.tags())


@router.get("/tags/{tag}", response_class=HTMLResponse)
def tag(tag: str, pages: PageService = Depends(get_page_service)) -> HTMLResponse:
    return HTMLResponse(pages.tag(tag))


@router.get("/resume", response_class=HTMLResponse)
def resume(pages: PageService = Depends(get_page_service)) -> HTMLResponse:
    return HTMLResponse(pages.resume())


@router.get("/contact", response_class=HTMLResponse)
def contact(pages: PageService = Depends(get_page_service)) -> HTMLResponse:
    return HTMLResponse(pages.contact())


def validate_contact_form(name: str, email: str, message: str) -> ContactMessage:
    """Build a ContactMessage from raw form fields."""
    try:
        return ContactMessage(name=name, email=email, message=message)
    except ValidationError as exc:
        errors = [
            {"field": ".".join(str(loc) for loc in error["loc"]), "message": error["msg"]} for error in exc.errors()
        ]
        raise ContactValidationError(errors=errors) from exc


@router.post("/contact", response_class=HTMLResponse)
async def submit_contact(
    name: str = Form(""),
    email: str = Form(""),
    message: str = Form(""),
    pages: PageService = Depends(get_page_service),
    relay: ContactService | None = Depends(get_contact_service),
) -> HTMLResponse:
    """
    Validate a contact submission and forward it to the form endpoint.

    Validation failures re-render the form with a 400; upstream failures
    re-render it with a 502. The submitted values are kept in the form.
    """
    if relay is None:
        raise HTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail="Contact relay is disabled")

    form = {"name": name, "email": email, "message": message}

    try:
        contact_message = validate_contact_form(name, email, message)
    except ContactValidationError as exc:
        fields = ", ".join(error["field"] for error in exc.details["validation_errors"])
        logger.info("Contact submission rejected: invalid %s", fields)
        return HTMLResponse(
            pages.contact(status="error", message=f"Please check the following fields: {fields}.", form=form),
            status_code=exc.status_code,
        )

    try:
        await relay.submit(contact_message)
    except ContactRelayError as exc:
        return HTMLResponse(
            pages.contact(status="error", message=CONTACT_FAILURE_MESSAGE, form=form),
            status_code=exc.status_code,
        )

    return HTMLResponse(pages.contact(status="success", message=CONTACT_SUCCESS_MESSAGE))
