from pathlib import Path
from typing import Optional
from urllib.parse import parse_qsl, urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from src.real_estate_catalog.client.api_client import PropertyApiClient
from src.real_estate_catalog.client.catalog_view import CatalogController, CatalogState, show_empty_state
from src.real_estate_catalog.client.filters import ALL, PropertyFilters, parse_price
from src.real_estate_catalog.core.config import settings
from src.real_estate_catalog.schemas.property_schema import ListingStatus, PropertyType

BASE_DIR = Path(__file__).resolve().parent

router = APIRouter(include_in_schema=False)

# Directory of the Jinja2 templates and of the static files (CSS)
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
static_files = StaticFiles(directory=str(BASE_DIR / "static"))


def format_price(value: float) -> str:
    """
    1500000 -> '₹1,500,000'
    """
    if float(value).is_integer():
        return f"₹{value:,.0f}"
    return f"₹{value:,.2f}"


templates.env.filters["price"] = format_price

# Page parameters that only make sense for a single render
TRANSIENT_PARAMS = ("notice", "show_form")


# --- Dependency that provides the HTTP client of the API ---
def get_api_client() -> PropertyApiClient:
    return PropertyApiClient(settings.api_base_url)


def page_query(items) -> str:
    """
    Query string that brings the page back with the same search and filters.
    The one-shot notice and the open form are not carried over.
    """
    return urlencode([(key, value) for key, value in items if key not in TRANSIENT_PARAMS])


def redirect_home(notices, return_query: str = "") -> RedirectResponse:
    # Only the query string travels with the form, the target is always the catalog page.
    # The notice is shown once by the page as an alert()
    params = [
        (key, value) for key, value in parse_qsl(return_query, keep_blank_values=True)
        if key not in TRANSIENT_PARAMS
    ]
    if notices:
        params.append(("notice", " ".join(notices)))
    url = "/?" + urlencode(params) if params else "/"
    return RedirectResponse(url=url, status_code=303)


@router.get("/", response_class=HTMLResponse)
def catalog_page(
    request: Request,
    search: str = "",
    type: str = ALL,
    status: str = ALL,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    show_form: bool = False,
    notice: Optional[str] = None,
    api: PropertyApiClient = Depends(get_api_client),
):
    notices = [notice] if notice else []
    controller = CatalogController(api, notices.append)

    state = CatalogState(
        filters=PropertyFilters(
            search_term=search,
            property_type=type,
            status=status,
            min_price=parse_price(min_price),
            max_price=parse_price(max_price),
        ),
        show_form=show_form,
    )
    state = controller.load(state)

    return templates.TemplateResponse(request, "index.html", {
        "state": state,
        "properties": state.visible_properties,
        "empty": show_empty_state(state),
        "raw_min_price": min_price or "",
        "raw_max_price": max_price or "",
        "property_types": [t.value for t in PropertyType],
        "listing_statuses": [s.value for s in ListingStatus],
        "all": ALL,
        "notice": " ".join(notices),
        "return_query": page_query(request.query_params.multi_items()),
    })


@router.post("/listings")
def create_listing(
    title: str = Form(""),
    description: str = Form(""),
    price: str = Form(""),
    location: str = Form(""),
    property_type: str = Form(PropertyType.APARTMENT.value, alias="type"),
    status: str = Form(ListingStatus.FOR_SALE.value),
    bedrooms: str = Form(""),
    bathrooms: str = Form(""),
    area: str = Form(""),
    image_url: str = Form("", alias="imageUrl"),
    return_query: str = Form("", alias="next"),
    api: PropertyApiClient = Depends(get_api_client),
):
    notices = []
    controller = CatalogController(api, notices.append)

    form = {
        "title": title,
        "description": description,
        "price": price,
        "location": location,
        "type": property_type,
        "status": status,
        "bedrooms": bedrooms,
        "bathrooms": bathrooms,
        "area": area,
        "imageUrl": image_url,
    }
    controller.submit_listing(CatalogState(), form)
    return redirect_home(notices, return_query)


@router.post("/listings/{property_id}/status")
def change_listing_status(
    property_id: str,
    status: str = Form(...),
    return_query: str = Form("", alias="next"),
    api: PropertyApiClient = Depends(get_api_client),
):
    notices = []
    CatalogController(api, notices.append).change_status(CatalogState(), property_id, status)
    return redirect_home(notices, return_query)


@router.post("/listings/{property_id}/delete")
def delete_listing(
    property_id: str,
    return_query: str = Form("", alias="next"),
    api: PropertyApiClient = Depends(get_api_client),
):
    notices = []
    controller = CatalogController(api, notices.append)
    # The browser already asked for confirmation before submitting the form
    controller.delete_listing(CatalogState(), property_id, confirm=lambda prompt: True)
    return redirect_home(notices, return_query)
