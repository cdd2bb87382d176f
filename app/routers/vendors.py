"""
Router para gestão de vendedores
"""
import logging
from typing import Literal, Optional
from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.orm import Session
from uuid import UUID
from app.config import settings
from app.database import get_db
from app.dependencies.auth import get_current_admin
from app.middleware.rate_limit import rate_limiter
from app.schemas.admin import ImportResult
from app.schemas.vendor import (
    VendorCreate,
    VendorListResponse,
    VendorResponse,
    VendorSortField,
    VendorSummary,
    VendorUpdate,
)
from app.services import import_service
from app.services.import_service import ImportFileError, VENDOR_COLUMNS
from app.services.store_service import StoreNotFoundError
from app.services.vendor_service import (
    VendorInUseError,
    VendorNotFoundError,
    VendorService,
    serialize_vendor,
)

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(get_current_admin)])


def _vendor_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Vendedor não encontrado"
    )


def _store_not_found():
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Loja informada não existe"
    )


@router.get("/vendors", response_model=VendorListResponse)
async def list_vendors(
    store: Optional[str] = Query(None, description="Nome da loja ou 'all'"),
    sort: Optional[VendorSortField] = Query(None, description="Campo de ordenação"),
    direction: Literal["asc", "desc"] = Query("asc"),
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
):
    """
    Lista vendedores com filtro por loja, ordenação e paginação
    (10 por página). Retorna também as lojas distintas para o filtro.
    """
    try:
        return VendorService(db).list_vendors(
            store=store,
            sort_field=sort,
            sort_direction=direction,
            page=page,
            per_page=settings.VENDORS_PAGE_SIZE,
        )
    except Exception as e:
        logger.error(f"Erro ao listar vendedores: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erro ao listar vendedores"
        )


@router.get("/vendors/summary", response_model=VendorSummary)
async def vendors_summary(db: Session = Depends(get_db)):
    """Totais para os cards: vendedores, notas recusadas e vendas do mês"""
    return VendorService(db).summary()


@router.get("/vendors/import/template")
async def vendors_import_template():
    """Modelo CSV para importação de vendedores"""
    return Response(
        content=import_service.template_csv(VENDOR_COLUMNS),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="modelo_vendedores.csv"'},
    )


@router.post(
    "/vendors/import",
    response_model=ImportResult,
    dependencies=[Depends(rate_limiter("import", settings.IMPORT_LIMIT_PER_MINUTE))],
)
async def import_vendors(
    file: UploadFile = File(..., description="CSV com colunas name,cpf_cnpj,phone,email,store"),
    db: Session = Depends(get_db),
):
    """
    Importa vendedores a partir de planilha CSV.

    Linhas inválidas (CPF/CNPJ, e-mail, loja inexistente) voltam em `errors`
    com o número da linha; as demais são gravadas.
    """
    content = await file.read()
    try:
        return import_service.import_vendors(db, content)
    except ImportFileError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Arquivo inválido: {e}"
        )
    except Exception as e:
        logger.error(f"Erro ao importar vendedores ({file.filename}): {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível importar os vendedores"
        )


@router.get("/vendors/{vendor_id}", response_model=VendorResponse)
async def get_vendor(vendor_id: UUID, db: Session = Depends(get_db)):
    vendor = VendorService(db).get_by_id(vendor_id)
    if not vendor:
        raise _vendor_not_found()
    return serialize_vendor(vendor)


@router.post("/vendors", response_model=VendorResponse, status_code=status.HTTP_201_CREATED)
async def create_vendor(vendor_data: VendorCreate, db: Session = Depends(get_db)):
    """Cadastra vendedor. Todos os campos são obrigatórios e o CPF/CNPJ é validado."""
    service = VendorService(db)
    try:
        vendor = service.create(vendor_data)
        return serialize_vendor(service.get_or_raise(vendor.id))
    except StoreNotFoundError:
        raise _store_not_found()
    except Exception as e:
        logger.error(f"Erro ao cadastrar vendedor: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível cadastrar o vendedor"
        )


@router.patch("/vendors/{vendor_id}", response_model=VendorResponse)
async def update_vendor(vendor_id: UUID, vendor_data: VendorUpdate, db: Session = Depends(get_db)):
    service = VendorService(db)
    try:
        vendor = service.update(vendor_id, vendor_data)
        return serialize_vendor(service.get_or_raise(vendor.id))
    except VendorNotFoundError:
        raise _vendor_not_found()
    except StoreNotFoundError:
        raise _store_not_found()
    except Exception as e:
        logger.error(f"Erro ao atualizar vendedor {vendor_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível atualizar o vendedor"
        )


@router.delete("/vendors/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vendor(vendor_id: UUID, db: Session = Depends(get_db)):
    try:
        VendorService(db).delete(vendor_id)
    except VendorNotFoundError:
        raise _vendor_not_found()
    except VendorInUseError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Vendedor possui notas fiscais e não pode ser removido"
        )
