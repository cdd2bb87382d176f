"""
Router para o catálogo de produtos
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.orm import Session
from uuid import UUID
from app.config import settings
from app.database import get_db
from app.dependencies.auth import get_current_admin
from app.middleware.rate_limit import rate_limiter
from app.models.product import PRODUCT_SECTORS
from app.schemas.admin import ImportResult
from app.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductSummary,
    ProductUpdate,
)
from app.services import import_service
from app.services.import_service import ImportFileError, PRODUCT_COLUMNS
from app.services.product_service import ProductInUseError, ProductNotFoundError, ProductService

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(get_current_admin)])


def _product_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Produto não encontrado"
    )


@router.get("/products", response_model=ProductListResponse)
async def list_products(
    sector: Optional[str] = Query(None, description=f"Setor: {', '.join(PRODUCT_SECTORS)}"),
    active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """Lista produtos do catálogo em ordem alfabética"""
    products, total = ProductService(db).get_all(
        sector=sector.strip().lower() if sector else None,
        active=active,
        search=search,
        skip=offset,
        limit=limit,
    )
    return {"products": products, "total": total, "limit": limit, "offset": offset}


@router.get("/products/summary", response_model=ProductSummary)
async def products_summary(db: Session = Depends(get_db)):
    return ProductService(db).summary()


@router.get("/products/import/template")
async def products_import_template():
    """Modelo CSV para importação de produtos"""
    return Response(
        content=import_service.template_csv(PRODUCT_COLUMNS),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="modelo_produtos.csv"'},
    )


@router.post(
    "/products/import",
    response_model=ImportResult,
    dependencies=[Depends(rate_limiter("import", settings.IMPORT_LIMIT_PER_MINUTE))],
)
async def import_products(
    file: UploadFile = File(..., description="CSV com colunas name,description,sector,image_url"),
    db: Session = Depends(get_db),
):
    content = await file.read()
    try:
        return import_service.import_products(db, content)
    except ImportFileError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Arquivo inválido: {e}"
        )
    except Exception as e:
        logger.error(f"Erro ao importar produtos ({file.filename}): {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível importar os produtos"
        )


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: UUID, db: Session = Depends(get_db)):
    product = ProductService(db).get_by_id(product_id)
    if not product:
        raise _product_not_found()
    return product


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(product_data: ProductCreate, db: Session = Depends(get_db)):
    try:
        return ProductService(db).create(product_data)
    except Exception as e:
        logger.error(f"Erro ao cadastrar produto: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível cadastrar o produto"
        )


@router.patch("/products/{product_id}", response_model=ProductResponse)
async def update_product(product_id: UUID, product_data: ProductUpdate, db: Session = Depends(get_db)):
    try:
        return ProductService(db).update(product_id, product_data)
    except ProductNotFoundError:
        raise _product_not_found()


@router.post("/products/{product_id}/toggle-active", response_model=ProductResponse)
async def toggle_product(product_id: UUID, db: Session = Depends(get_db)):
    """Ativa/desativa o produto no catálogo"""
    try:
        return ProductService(db).toggle_active(product_id)
    except ProductNotFoundError:
        raise _product_not_found()


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: UUID, db: Session = Depends(get_db)):
    try:
        ProductService(db).delete(product_id)
    except ProductNotFoundError:
        raise _product_not_found()
    except ProductInUseError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Produto já aparece em notas fiscais; desative-o em vez de remover"
        )
