"""
Router para gestão de lojas
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from uuid import UUID
from app.database import get_db
from app.dependencies.auth import get_current_admin
from app.schemas.store import StoreCreate, StoreResponse, StoreUpdate
from app.services.store_service import StoreInUseError, StoreNotFoundError, StoreService

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(get_current_admin)])


def _store_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Loja não encontrada"
    )


@router.get("/stores", response_model=List[StoreResponse])
async def list_stores(db: Session = Depends(get_db)):
    """Lista todas as lojas na ordem de cadastro"""
    return StoreService(db).get_all()


@router.get("/stores/{store_id}", response_model=StoreResponse)
async def get_store(store_id: UUID, db: Session = Depends(get_db)):
    store = StoreService(db).get_by_id(store_id)
    if not store:
        raise _store_not_found()
    return store


@router.post("/stores", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
async def create_store(store_data: StoreCreate, db: Session = Depends(get_db)):
    """
    Cadastra uma loja. Nome, região e endereço são obrigatórios;
    o faturamento mensal começa zerado.
    """
    try:
        return StoreService(db).create(store_data)
    except Exception as e:
        logger.error(f"Erro ao cadastrar loja: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível cadastrar a loja"
        )


@router.patch("/stores/{store_id}", response_model=StoreResponse)
async def update_store(store_id: UUID, store_data: StoreUpdate, db: Session = Depends(get_db)):
    """Atualiza dados da loja (tela de configurações): nome, região, endereço e telefone"""
    try:
        return StoreService(db).update(store_id, store_data)
    except StoreNotFoundError:
        raise _store_not_found()
    except Exception as e:
        logger.error(f"Erro ao atualizar loja {store_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível atualizar a loja"
        )


@router.delete("/stores/{store_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_store(store_id: UUID, db: Session = Depends(get_db)):
    try:
        StoreService(db).delete(store_id)
    except StoreNotFoundError:
        raise _store_not_found()
    except StoreInUseError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Loja possui vendedores ou notas fiscais vinculados"
        )
