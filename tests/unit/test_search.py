from sqlalchemy.dialects import postgresql, sqlite

from infradb.db import models
from infradb.db.search import build_search_condition

TSV = (models.Tenant.name, models.Tenant.display_name)
ILIKE = (models.Tenant.name, models.Tenant.org)


def _sql(condition, dialect):
    return str(condition.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))


def test_postgres_uses_text_search_and_ilike():
    sql = _sql(build_search_condition("postgresql", "web server", TSV, ILIKE), postgresql.dialect())
    assert "to_tsvector('english'" in sql
    assert "to_tsquery('english', 'web:* | server:*')" in sql
    assert "@@" in sql
    # psycopg2 uses the pyformat paramstyle, so literal percent signs are doubled
    assert "tenant.name ILIKE '%%web server%%'" in sql
    assert "coalesce(CAST(tenant.display_name AS TEXT), ' ')" in sql


def test_other_dialects_only_ilike():
    sql = _sql(build_search_condition("sqlite", "web", TSV, ILIKE), sqlite.dialect())
    assert "to_tsvector" not in sql
    assert "lower(tenant.name) LIKE lower('%web%')" in sql


def test_punctuation_only_query_skips_text_search():
    sql = _sql(build_search_condition("postgresql", "&&", TSV, ILIKE), postgresql.dialect())
    assert "to_tsquery" not in sql
    assert "ILIKE '%%&&%%'" in sql
