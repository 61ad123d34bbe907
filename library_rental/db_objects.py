from sqlalchemy import text
from library_rental.extensions import db

OPEN_RENTAL_INDEX = "uq_rentals_open_pair"

# bir (book_id, user_id) çifti için en fazla bir açık kiralama
PARTIAL_INDEX_SQL = f"""
CREATE UNIQUE INDEX IF NOT EXISTS {OPEN_RENTAL_INDEX}
ON rentals (book_id, user_id)
WHERE return_date IS NULL
"""

MSSQL_FILTERED_INDEX_SQL = f"""
IF NOT EXISTS (
    SELECT 1 FROM sys.indexes
    WHERE name = N'{OPEN_RENTAL_INDEX}' AND object_id = OBJECT_ID(N'dbo.rentals')
)
BEGIN
    CREATE UNIQUE NONCLUSTERED INDEX {OPEN_RENTAL_INDEX}
    ON dbo.rentals (book_id, user_id)
    WHERE return_date IS NULL;
END
"""

INDEX_SQL_BY_DIALECT = {
    "sqlite": PARTIAL_INDEX_SQL,
    "postgresql": PARTIAL_INDEX_SQL,
    "mssql": MSSQL_FILTERED_INDEX_SQL,
}


class UnsupportedStore(RuntimeError):
    pass


def open_rental_index_sql(dialect: str) -> str:
    """
    Açık kiralama tekilliği store seviyesinde garanti edilemiyorsa
    (partial/filtered index yok, ör. MySQL) uygulama başlamaz.
    """
    index_sql = INDEX_SQL_BY_DIALECT.get(dialect)
    if index_sql is None:
        raise UnsupportedStore(
            f"{dialect} does not support partial unique indexes; "
            f"supported stores: {', '.join(sorted(INDEX_SQL_BY_DIALECT))}"
        )
    return index_sql


def ensure_db_objects(app):
    with app.app_context():
        dialect = db.engine.dialect.name
        try:
            index_sql = open_rental_index_sql(dialect)
        except UnsupportedStore as e:
            app.logger.error(f"[db_objects] HATA: {e}")
            raise

        if not app.config.get("AUTO_CREATE_SCHEMA", True):
            app.logger.info("[db_objects] AUTO_CREATE_SCHEMA kapalı, atlandı.")
            return

        # modellerin metadata'ya kayıtlı olması için
        from library_rental import models  # noqa: F401

        db.create_all()

        conn = db.engine.connect()
        trans = conn.begin()
        try:
            conn.execute(text(index_sql))
            trans.commit()
            app.logger.info(f"[db_objects] {OPEN_RENTAL_INDEX} ensure edildi ({dialect}).")
        except Exception as e:
            trans.rollback()
            app.logger.error(f"[db_objects] HATA: {e}")
            raise
        finally:
            conn.close()
