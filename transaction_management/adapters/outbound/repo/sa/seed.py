from sqlalchemy import select, func, insert

from transaction_management.adapters.outbound.repo.sa import models
from transaction_management.adapters.outbound.repo.sa.base import Base
from transaction_management.adapters.outbound.repo.sa.database import Database
from transaction_management.ports.common.logs import get_logger

logger = get_logger("seed")

# Northwind customers of the countries used by the sample
SAMPLE_CUSTOMERS = [
    ("ALFKI", "Alfreds Futterkiste", "Germany"),
    ("BLAUS", "Blauer See Delikatessen", "Germany"),
    ("DRACD", "Drachenblut Delikatessen", "Germany"),
    ("FRANK", "Frankenversand", "Germany"),
    ("KOENE", "Königlich Essen", "Germany"),
    ("LEHMS", "Lehmanns Marktstand", "Germany"),
    ("MORGK", "Morgenstern Gesundkost", "Germany"),
    ("OTTIK", "Ottilies Käseladen", "Germany"),
    ("QUICK", "QUICK-Stop", "Germany"),
    ("TOMSP", "Toms Spezialitäten", "Germany"),
    ("WANDK", "Die Wandernde Kuh", "Germany"),
    ("BLONP", "Blondesddsl père et fils", "France"),
    ("BONAP", "Bon app'", "France"),
    ("DUMON", "Du monde entier", "France"),
    ("FOLIG", "Folies gourmandes", "France"),
    ("FRANR", "France restauration", "France"),
    ("LACOR", "La corne d'abondance", "France"),
    ("LAMAI", "La maison d'Asie", "France"),
    ("PARIS", "Paris spécialités", "France"),
    ("SPECD", "Spécialités du monde", "France"),
    ("VICTE", "Victuailles en stock", "France"),
    ("VINET", "Vins et alcools Chevalier", "France"),
    ("SANTG", "Santé Gourmet", "Norway"),
]


async def ensure_database_initialized(database: Database) -> bool:
    """
    Creates the schema and loads the sample customers into an empty customer table.
    Returns True when the sample data has been loaded by this call.
    """
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        customers_count = await conn.scalar(select(func.count()).select_from(models.Customer))
        if customers_count:
            return False
        await conn.execute(insert(models.Customer).values([
            {"customer_id": customer_id, "company_name": company_name, "country": country}
            for customer_id, company_name, country in SAMPLE_CUSTOMERS
        ]))
    logger.info(f"loaded {len(SAMPLE_CUSTOMERS)} sample customers into {database.url}")
    return True
