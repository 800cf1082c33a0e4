"""create clients, scopes and client_scopes

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "scopes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_scopes_name", "scopes", ["name"], unique=True)

    op.create_table(
        "clients",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("client_id", sa.String(), nullable=False),
        sa.Column("client_secret", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_clients_deleted_at", "clients", ["deleted_at"])
    op.create_index(
        "uq_clients_client_id_active",
        "clients",
        ["client_id"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
        sqlite_where=sa.text("deleted_at IS NULL"),
    )

    op.create_table(
        "client_scopes",
        sa.Column("client_id", sa.Uuid(), nullable=False),
        sa.Column("scope_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="CASCADE", onupdate="CASCADE"),
        sa.ForeignKeyConstraint(["scope_id"], ["scopes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("client_id", "scope_id"),
        comment="Many-to-many association between clients and scopes",
    )
    op.create_index("ix_client_scopes_client_id", "client_scopes", ["client_id"])
    op.create_index("ix_client_scopes_scope_id", "client_scopes", ["scope_id"])


def downgrade() -> None:
    op.drop_index("ix_client_scopes_scope_id", table_name="client_scopes")
    op.drop_index("ix_client_scopes_client_id", table_name="client_scopes")
    op.drop_table("client_scopes")
    op.drop_index("uq_clients_client_id_active", table_name="clients")
    op.drop_index("ix_clients_deleted_at", table_name="clients")
    op.drop_table("clients")
    op.drop_index("ix_scopes_name", table_name="scopes")
    op.drop_table("scopes")
