"""001: create products table (remote mirror)

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE products (
            id              VARCHAR(64)     PRIMARY KEY,
            title           VARCHAR(200)    NOT NULL,
            price           REAL            NOT NULL DEFAULT 0,
            description     TEXT            NOT NULL DEFAULT '',
            category        VARCHAR(64)     NOT NULL,
            condition       VARCHAR(20)     NOT NULL,
            image           TEXT            NOT NULL DEFAULT '',
            images          TEXT            NOT NULL DEFAULT '[]',
            seller_id       VARCHAR(64)     NOT NULL,
            seller_name     VARCHAR(200)    NOT NULL DEFAULT '',
            created_at      BIGINT          NOT NULL,
            location        VARCHAR(200)    NOT NULL DEFAULT '',
            status          VARCHAR(10)     NOT NULL DEFAULT 'active',
            CONSTRAINT ck_products_status CHECK (status IN ('active', 'sold'))
        )
    """)
    op.execute("CREATE INDEX idx_products_created_at ON products (created_at DESC)")
    op.execute("CREATE INDEX idx_products_seller ON products (seller_id)")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS products")
