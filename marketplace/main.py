# marketplace/main.py
from pathlib import Path
from typing import List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, settings as default_settings
from .core import InternalError, MarketplaceError, ValidationError
from .database import Stores
from .log import configure_logging, get_logger
from .models import (
    LoginIn, LoginOut, MessageOut, Product, ProductCreatedOut, ProductForm, RegisterIn
)
from .uploads import ensure_upload_dir, staged_upload

logger = get_logger(__name__)

router = APIRouter(prefix="/api")

def get_stores(request: Request) -> Stores:
    return request.app.state.stores

# ---------------------------
# Catalog endpoints
# ---------------------------
@router.get("/products", response_model=List[Product])
async def list_products(stores: Stores = Depends(get_stores)):
    return stores.catalog.list()

@router.post("/products", status_code=201, response_model=ProductCreatedOut)
async def create_product(
    request: Request,
    title: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    condition: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    stores: Stores = Depends(get_stores),
):
    form = ProductForm(
        title=title, category=category, condition=condition,
        price=price, description=description,
    )
    try:
        async with staged_upload(image, request.app.state.uploads_dir, request.app.state.public_dir) as stored:
            product = await stores.catalog.create(form, stored)
    except MarketplaceError:
        raise
    except Exception:
        logger.exception("product creation failed")
        raise InternalError()
    return {"message": "Product listed successfully", "product": product}

# ---------------------------
# Account endpoints
# ---------------------------
@router.post("/register", status_code=201, response_model=MessageOut)
async def register(payload: RegisterIn, stores: Stores = Depends(get_stores)):
    try:
        stores.accounts.register(payload.username, payload.email, payload.password)
    except MarketplaceError:
        raise
    except Exception:
        logger.exception("registration failed")
        raise InternalError()
    return {"message": "User registered successfully"}

@router.post("/login", response_model=LoginOut)
async def login(payload: LoginIn, stores: Stores = Depends(get_stores)):
    try:
        account = stores.accounts.authenticate(payload.username, payload.password)
    except MarketplaceError:
        raise
    except Exception:
        logger.exception("login failed")
        raise InternalError()
    return {"message": "Login successful", "username": account.username}

# ---------------------------
# Error rendering
# ---------------------------
async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

async def request_validation_handler(request: Request, exc: RequestValidationError):
    # malformed bodies are reported like missing fields, not as FastAPI's 422
    err = ValidationError()
    return JSONResponse(status_code=err.status_code, content={"message": err.message})

# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="marketplace (in-memory demo)")
    app.state.settings = settings
    app.state.stores = Stores(settings.PLACEHOLDER_IMAGE_URL)
    app.state.public_dir = Path(settings.PUBLIC_DIR)
    app.state.uploads_dir = ensure_upload_dir(settings.PUBLIC_DIR, settings.UPLOADS_SUBDIR)
    logger.info("serving static files from %s, uploads in %s", settings.PUBLIC_DIR, app.state.uploads_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(router)
    # must come after the API routes, it swallows every other path
    app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")
    return app

# built on demand: uvicorn marketplace.main:create_app --factory
if __name__ == "__main__":
    uvicorn.run(create_app(), host=default_settings.HOST, port=default_settings.PORT)
