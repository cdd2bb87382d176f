"""
Seed com dados de demonstração: lojas, vendedores, produtos e notas fiscais
"""
import random
from datetime import timedelta
from decimal import Decimal
from app.database import SessionLocal
from app.models.product import Product
from app.models.receipt import Receipt, STATUS_APPROVED, STATUS_PENDING, STATUS_REJECTED
from app.models.receipt_product import ReceiptProduct
from app.models.store import Store
from app.models.vendor import Vendor
from app.services.stats_service import refresh_all_stats
from app.utils.dates import today

DEFAULT_STORES = [
    ("Drogaria Centro", "Sudeste", "Av. Paulista, 1000 - São Paulo/SP"),
    ("Farmácia Boa Vista", "Nordeste", "Rua do Sol, 45 - Recife/PE"),
    ("Pet & Saúde Sul", "Sul", "Rua XV de Novembro, 300 - Curitiba/PR"),
]

DEFAULT_VENDORS = [
    ("Ana Souza", "52998224725", "(11) 98888-0001", "ana.souza@example.com", 0),
    ("Bruno Lima", "11222333000181", "(81) 97777-0002", "bruno.lima@example.com", 1),
    ("Carla Dias", "39053344705", "(41) 96666-0003", "carla.dias@example.com", 2),
]

DEFAULT_PRODUCTS = [
    ("Dipirona 500mg", "Analgésico e antitérmico", "medicamentos", Decimal("12.90")),
    ("Whey Protein 900g", "Suplemento proteico", "suplementos", Decimal("149.90")),
    ("Vermífugo Canino", "Para cães até 10kg", "veterinario", Decimal("39.50")),
    ("Vitamina C 1g", "Efervescente", "suplementos", Decimal("24.00")),
]

REJECTION_REASONS = [
    "Imagem ilegível",
    "Nota duplicada",
    "Produto fora do programa",
]


def seed_demo_data(receipts_per_vendor: int = 8):
    """Insere dados de demonstração se o banco ainda não tiver lojas"""
    db = SessionLocal()
    try:
        if db.query(Store).first():
            print("⏭️  Banco já possui lojas, seed de demonstração ignorado")
            return

        stores = [Store(name=n, region=r, address=a, monthly_revenue=0) for n, r, a in DEFAULT_STORES]
        db.add_all(stores)
        db.flush()

        vendors = [
            Vendor(
                name=name,
                cpf_cnpj=doc,
                phone=phone,
                email=email,
                store_id=stores[store_index].id,
                receipts_submitted=0,
                receipts_rejected=0,
                monthly_sales=0,
            )
            for name, doc, phone, email, store_index in DEFAULT_VENDORS
        ]
        products = [
            Product(name=n, description=d, sector=s, active=True)
            for n, d, s, _ in DEFAULT_PRODUCTS
        ]
        db.add_all(vendors + products)
        db.flush()

        prices = {p.id: price for p, (_, _, _, price) in zip(products, DEFAULT_PRODUCTS)}
        statuses = [STATUS_APPROVED, STATUS_APPROVED, STATUS_REJECTED, STATUS_PENDING]
        reference = today()

        number = 1000
        for vendor in vendors:
            for _ in range(receipts_per_vendor):
                number += 1
                status = random.choice(statuses)
                chosen = random.sample(products, k=random.randint(1, len(products)))
                items = []
                for product in chosen:
                    quantity = random.randint(1, 4)
                    unit_price = prices[product.id]
                    items.append(ReceiptProduct(
                        product_id=product.id,
                        quantity=quantity,
                        unit_price=unit_price,
                        total_price=unit_price * quantity,
                    ))

                db.add(Receipt(
                    receipt_number=f"NF-{number}",
                    store_id=vendor.store_id,
                    vendor_id=vendor.id,
                    receipt_date=reference - timedelta(days=random.randint(0, 45)),
                    total_value=sum((i.total_price for i in items), Decimal("0")),
                    status=status,
                    rejection_reason=random.choice(REJECTION_REASONS) if status == STATUS_REJECTED else None,
                    products_count=len(items),
                    items=items,
                ))

        db.commit()
        refresh_all_stats(db)
        print(f"✅ Seed concluído: {len(stores)} lojas, {len(vendors)} vendedores, {len(products)} produtos")
    except Exception as e:
        db.rollback()
        print(f"❌ Erro ao executar seed: {str(e)}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_demo_data()
