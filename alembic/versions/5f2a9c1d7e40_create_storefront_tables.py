"""create storefront tables

Revision ID: 5f2a9c1d7e40
Revises:
Create Date: 2026-10-19 10:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5f2a9c1d7e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
        sa.Column("can_login", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_user_email", "user", ["email"])

    op.create_table(
        "address",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("label", sa.String(), nullable=False, server_default="Address"),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("line1", sa.String(), nullable=False),
        sa.Column("line2", sa.String(), nullable=False, server_default=""),
        sa.Column("city", sa.String(), nullable=False),
        sa.Column("state", sa.String(), nullable=False),
        sa.Column("postal_code", sa.String(), nullable=False),
        sa.Column("country", sa.String(), nullable=False, server_default="US"),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_address_user_id", "address", ["user_id"])

    op.create_table(
        "product",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("price_usd", sa.Float(), nullable=False, server_default="0"),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("is_new", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_product_slug", "product", ["slug"])
    op.create_index("ix_product_category", "product", ["category"])

    op.create_table(
        "kv_entry",
        sa.Column("key", sa.String(), primary_key=True),
        sa.Column("value", sa.JSON(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "order",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_number", sa.String(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("address_id", sa.String(), nullable=False),
        sa.Column("address", sa.JSON(), nullable=True),
        sa.Column("subtotal_usd", sa.Float(), nullable=False),
        sa.Column("discount_usd", sa.Float(), nullable=False, server_default="0"),
        sa.Column("shipping_usd", sa.Float(), nullable=False),
        sa.Column("total_usd", sa.Float(), nullable=False),
        sa.Column("promo_code", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_order_order_number", "order", ["order_number"], unique=True)
    op.create_index("ix_order_user_id", "order", ["user_id"])
    op.create_index("ix_order_created_at", "order", ["created_at"])

    op.create_table(
        "orderitem",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("order.id"), nullable=False),
        sa.Column("product_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price_usd", sa.Float(), nullable=False),
        sa.Column("line_total_usd", sa.Float(), nullable=False),
    )

    order_counter = op.create_table(
        "order_counter",
        sa.Column("name", sa.String(), primary_key=True),
        sa.Column("value", sa.Integer(), nullable=False, server_default="0"),
    )
    op.bulk_insert(order_counter, [{"name": "orders", "value": 0}])


def downgrade():
    op.drop_table("order_counter")
    op.drop_table("orderitem")
    op.drop_index("ix_order_created_at", table_name="order")
    op.drop_index("ix_order_user_id", table_name="order")
    op.drop_index("ix_order_order_number", table_name="order")
    op.drop_table("order")
    op.drop_table("kv_entry")
    op.drop_index("ix_product_category", table_name="product")
    op.drop_index("ix_product_slug", table_name="product")
    op.drop_table("product")
    op.drop_index("ix_address_user_id", table_name="address")
    op.drop_table("address")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
