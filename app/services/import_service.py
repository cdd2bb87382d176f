"""
Importação de vendedores e produtos via planilha CSV
"""
import csv
import io
import logging
from typing import Any, Dict, List, Tuple
from pydantic import ValidationError
from sqlalchemy.orm import Session
from app.config import settings
from app.models.product import Product
from app.models.store import Store
from app.models.vendor import Vendor
from app.schemas.product import ProductCreate
from app.schemas.vendor import VendorCreate

logger = logging.getLogger(__name__)

VENDOR_COLUMNS = ["name", "cpf_cnpj", "phone", "email", "store"]
PRODUCT_COLUMNS = ["name", "description", "sector", "image_url"]


class ImportFileError(Exception):
    """Arquivo ilegível ou sem as colunas esperadas"""
    pass


def template_csv(columns: List[str]) -> str:
    buffer = io.StringIO()
    csv.writer(buffer).writerow(columns)
    return buffer.getvalue()


def _read_rows(content: bytes, required: List[str]) -> List[Tuple[int, Dict[str, str]]]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = content.decode("latin-1")

    if not text.strip():
        raise ImportFileError("arquivo vazio")

    # Excel em pt-BR exporta CSV com ';'
    first_line = text.splitlines()[0]
    delimiter = ";" if first_line.count(";") > first_line.count(",") else ","

    reader = csv.DictReader(io.StringIO(text), delimiter=delimiter)
    header = [h.strip().lower() for h in (reader.fieldnames or [])]
    missing = [c for c in required if c not in header]
    if missing:
        raise ImportFileError(f"colunas ausentes: {', '.join(missing)}")

    rows = []
    for line_number, row in enumerate(reader, start=2):
        cleaned = {
            (k or "").strip().lower(): (v or "").strip()
            for k, v in row.items()
            if k is not None
        }
        if not any(cleaned.values()):
            continue
        rows.append((line_number, cleaned))

    if len(rows) > settings.IMPORT_MAX_ROWS:
        raise ImportFileError(f"máximo de {settings.IMPORT_MAX_ROWS} linhas por arquivo")
    return rows


def _error_message(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


def import_vendors(db: Session, content: bytes) -> Dict[str, Any]:
    """
    Importa vendedores. A coluna `store` é o nome da loja.
    Linhas inválidas são reportadas; as válidas são gravadas numa única transação.
    """
    rows = _read_rows(content, VENDOR_COLUMNS)
    stores = {s.name.strip().lower(): s.id for s in db.query(Store).all()}

    errors = []
    vendors = []
    for line_number, row in rows:
        store_id = stores.get(row.get("store", "").lower())
        if not store_id:
            errors.append({"line": line_number, "error": f"loja não encontrada: {row.get('store')}"})
            continue
        try:
            data = VendorCreate(
                name=row.get("name", ""),
                cpf_cnpj=row.get("cpf_cnpj", ""),
                phone=row.get("phone", ""),
                email=row.get("email", ""),
                store_id=store_id,
            )
        except ValidationError as e:
            errors.append({"line": line_number, "error": _error_message(e)})
            continue
        vendors.append(
            Vendor(**data.model_dump(), receipts_submitted=0, receipts_rejected=0, monthly_sales=0)
        )

    try:
        db.add_all(vendors)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error importing vendors: {e}")
        raise

    logger.info(f"vendors_imported: {len(vendors)} ok, {len(errors)} errors")
    return {"imported": len(vendors), "errors": errors}


def import_products(db: Session, content: bytes) -> Dict[str, Any]:
    rows = _read_rows(content, ["name", "sector"])

    errors = []
    products = []
    for line_number, row in rows:
        try:
            data = ProductCreate(
                name=row.get("name", ""),
                description=row.get("description") or None,
                sector=row.get("sector", ""),
                image_url=row.get("image_url") or None,
            )
        except ValidationError as e:
            errors.append({"line": line_number, "error": _error_message(e)})
            continue
        products.append(Product(**data.model_dump()))

    try:
        db.add_all(products)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error importing products: {e}")
        raise

    logger.info(f"products_imported: {len(products)} ok, {len(errors)} errors")
    return {"imported": len(products), "errors": errors}
