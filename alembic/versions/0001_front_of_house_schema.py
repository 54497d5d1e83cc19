"""front of house schema

Revision ID: 0001_front_of_house
Revises:
Create Date: 2026-10-16
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_front_of_house"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_table(
        "profiles",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("role", sa.Enum("admin", "manager", "waiter", name="profile_role"), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "tables",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("status", sa.Enum("free", "occupied", "reserved", name="table_status"), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=64), nullable=True),
        sa.Column("last_occupied_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("x_position", sa.Float(), nullable=True),
        sa.Column("y_position", sa.Float(), nullable=True),
        sa.Column("merged_into_id", sa.Integer(), sa.ForeignKey("tables.id"), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("number > 0", name="ck_tables_number_positive"),
        sa.CheckConstraint("capacity > 0", name="ck_tables_capacity_positive"),
        sa.CheckConstraint("merged_into_id IS NULL OR merged_into_id <> id", name="ck_tables_not_merged_into_self"),
    )
    op.create_index("ix_tables_number", "tables", ["number"], unique=True)
    op.create_index("ix_tables_merged_into_id", "tables", ["merged_into_id"])
    op.create_table(
        "menu_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_table(
        "menu_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("menu_categories.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("preparation_time", sa.String(length=32), nullable=True),
        sa.Column("allergens", sa.JSON(), nullable=False),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.Column("is_vegetarian", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_vegan", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_gluten_free", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("spiciness_level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_weight_based", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("price_per_kg", sa.Numeric(10, 2), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("spiciness_level BETWEEN 0 AND 3", name="ck_menu_items_spiciness_range"),
    )
    op.create_index("ix_menu_items_category_id", "menu_items", ["category_id"])
    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False, server_default="0"),
        sa.Column("unit", sa.String(length=32), nullable=False),
        sa.Column("minimum_quantity", sa.Numeric(12, 3), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity_non_negative"),
    )
    op.create_table(
        "inventory_movements",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "inventory_item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.Enum("in", "out", name="movement_type"), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("quantity > 0", name="ck_inventory_movements_quantity_positive"),
    )
    op.create_index("ix_inventory_movements_inventory_item_id", "inventory_movements", ["inventory_item_id"])
    op.create_table(
        "menu_item_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("menu_item_id", sa.Integer(), sa.ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "inventory_item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit", sa.String(length=32), nullable=False),
        sa.UniqueConstraint("menu_item_id", "inventory_item_id", name="uq_menu_item_ingredients_pair"),
        sa.CheckConstraint("quantity > 0", name="ck_menu_item_ingredients_quantity_positive"),
    )
    op.create_index("ix_menu_item_ingredients_menu_item_id", "menu_item_ingredients", ["menu_item_id"])
    op.create_index("ix_menu_item_ingredients_inventory_item_id", "menu_item_ingredients", ["inventory_item_id"])
    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("table_id", sa.Integer(), sa.ForeignKey("tables.id"), nullable=False),
        sa.Column("waiter_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("parent_order_id", sa.Integer(), sa.ForeignKey("orders.id", ondelete="SET NULL"), nullable=True),
        sa.Column(
            "status",
            sa.Enum("pending", "preparing", "ready", "served", "paid", "cancelled", name="order_status"),
            nullable=False,
        ),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_orders_table_id", "orders", ["table_id"])
    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("menu_item_id", sa.Integer(), sa.ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("weight_kg", sa.Numeric(8, 3), nullable=True),
        sa.Column("unit_price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column(
            "status",
            sa.Enum("pending", "preparing", "ready", "served", "cancelled", name="order_item_status"),
            nullable=False,
        ),
        *_timestamps(),
        sa.CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])
    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("table_id", sa.Integer(), sa.ForeignKey("tables.id", ondelete="CASCADE"), nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_phone", sa.String(length=40), nullable=True),
        sa.Column("customer_email", sa.String(length=255), nullable=True),
        sa.Column("guests", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("duration", sa.String(length=32), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("confirmed", "cancelled", "completed", name="reservation_status"),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_reservations_table_id", "reservations", ["table_id"])
    op.create_index("ix_reservations_date", "reservations", ["date"])


def downgrade() -> None:
    for table_name in (
        "reservations",
        "order_items",
        "orders",
        "menu_item_ingredients",
        "inventory_movements",
        "inventory_items",
        "menu_items",
        "menu_categories",
        "tables",
        "profiles",
        "users",
    ):
        op.drop_table(table_name)
