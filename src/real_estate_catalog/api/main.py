from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List

from src.real_estate_catalog.core.config import settings
from src.real_estate_catalog.core.database import engine, get_db
from src.real_estate_catalog.core.exceptions import PropertyNotFoundError
from src.real_estate_catalog.models import property_model
from src.real_estate_catalog.schemas import property_schema

import logging
import uvicorn

# Logging configuration
logging.basicConfig(
    level=settings.log_level, # Minimum level to display
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)

# Logger instance for this module
logger = logging.getLogger(__name__)

# Creates the tables in the database, based on the sqlalchemy models
property_model.Base.metadata.create_all(bind=engine)

API_PREFIX = "/api"

# FastAPI instance
app = FastAPI(title="Real Estate Catalog API", version="1.0.0")

# The client may be hosted on another origin during development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def format_validation_errors(errors) -> str:
    """
    Turns the pydantic error list into a single readable message, e.g.
    "price: Field required; type: Input should be 'Apartment', 'House', ...".
    """
    messages = []
    for error in errors:
        # The first item of 'loc' is where the value came from (body, path, query)
        location = ".".join(str(part) for part in error["loc"][1:])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages)


# Invalid bodies are a client error (400), with the validation message as detail
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = format_validation_errors(exc.errors())
    logger.warning(f"Validation error on {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


def get_property_or_404(db: Session, property_id: str) -> property_model.Property:
    prop = db.get(property_model.Property, property_id)
    if prop is None:
        raise PropertyNotFoundError(property_id)
    return prop


# Health check, used by monitoring only
@app.get(API_PREFIX, response_model=property_schema.MessageSchema)
def health_check():
    return {"message": "Real Estate API is running!"}


@app.get(f"{API_PREFIX}/properties", response_model=List[property_schema.PropertySchema])
def list_properties(db: Session = Depends(get_db)):
    """
    Returns every listing, newest first.
    """
    logger.info(">>> Received request to list all properties.")

    try:
        properties = (
            db.query(property_model.Property)
            .order_by(property_model.Property.created_at.desc())
            .all()
        )
        logger.info(f">>> {len(properties)} properties found.")
        return properties

    except SQLAlchemyError as e:
        logger.error(f"An error occurred while querying the database: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    f"{API_PREFIX}/properties",
    response_model=property_schema.PropertySchema,
    status_code=status.HTTP_201_CREATED,
)
def create_property(data: property_schema.PropertyCreateSchema, db: Session = Depends(get_db)):
    """
    Persists a new listing. The body was already validated by the schema, so at this
    point only infrastructure errors can happen.
    """
    logger.info(f">>> Received property data: {data.model_dump()}")

    try:
        prop = property_model.Property(**data.model_dump())
        db.add(prop)
        db.commit()
        db.refresh(prop)

        logger.info(f">>> Property '{prop.id}' saved successfully.")
        return prop

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving property: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.put(f"{API_PREFIX}/properties/{{property_id}}", response_model=property_schema.PropertySchema)
def update_property(
    property_id: str,
    data: property_schema.PropertyUpdateSchema,
    db: Session = Depends(get_db),
):
    """
    Replaces only the fields present in the body and returns the updated listing.
    """
    changes = data.changes()
    logger.info(f">>> Received request to update property '{property_id}' with {changes}")

    try:
        prop = get_property_or_404(db, property_id)

        for field, value in changes.items():
            setattr(prop, field, value)

        db.commit()
        db.refresh(prop)

        logger.info(f">>> Property '{property_id}' updated.")
        return prop

    except PropertyNotFoundError as e:
        logger.warning(str(e))
        raise HTTPException(status_code=404, detail=str(e))

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating property '{property_id}': {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.delete(f"{API_PREFIX}/properties/{{property_id}}", response_model=property_schema.MessageSchema)
def delete_property(property_id: str, db: Session = Depends(get_db)):
    """
    Deletes the listing if it exists. Deleting an unknown id is not an error.
    """
    logger.info(f">>> Received request to delete property '{property_id}'.")

    try:
        deleted = (
            db.query(property_model.Property)
            .filter(property_model.Property.id == property_id)
            .delete()
        )
        db.commit()

        logger.info(f">>> {deleted} record(s) removed for id '{property_id}'.")
        return {"message": "Property deleted successfully"}

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting property '{property_id}': {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


# In production the same process serves the web client (unified deployment)
if settings.serve_client:
    from src.real_estate_catalog.client import web

    app.mount("/static", web.static_files, name="static")
    app.include_router(web.router)


def serve():
    """
    Entry point of the 'real-estate-catalog' command.
    """
    logger.info(f"Server running on http://localhost:{settings.port}")
    logger.info(f"Environment: {settings.app_env}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    serve()
