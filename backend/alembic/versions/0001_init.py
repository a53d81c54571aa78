from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("subdomain", sa.String(length=63), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="ACTIVE"),
        *_timestamps(),
        sa.UniqueConstraint("subdomain", name="uq_tenant_subdomain"),
    )
    op.create_index("ix_tenants_subdomain", "tenants", ["subdomain"], unique=False)

    op.create_table(
        "tenant_users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("tenant_id", sa.String(length=36), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("tenant_id", "email", name="uq_tenant_users_tenant_email"),
    )
    op.create_index("ix_tenant_users_tenant_id", "tenant_users", ["tenant_id"], unique=False)
    op.create_index("ix_tenant_users_email", "tenant_users", ["email"], unique=False)

    op.create_table(
        "tenant_preferences",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("tenant_id", sa.String(length=36), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("playback_settings", sa.JSON(), nullable=False),
        sa.Column("genre_preferences", sa.JSON(), nullable=False),
        sa.Column("ad_rules", sa.JSON(), nullable=False),
        sa.Column("volume_default", sa.Integer(), nullable=False, server_default="50"),
        *_timestamps(),
    )
    op.create_index("ix_tenant_preferences_tenant_id", "tenant_preferences", ["tenant_id"], unique=True)

    op.create_table(
        "tenant_subscriptions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("tenant_id", sa.String(length=36), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("plan_type", sa.String(length=20), nullable=False, server_default="BASIC"),
        sa.Column("plan_name", sa.String(length=255), nullable=False, server_default="Basic Plan"),
        sa.Column("max_users", sa.Integer(), nullable=False, server_default="10"),
        sa.Column("max_storage_gb", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("billing_cycle", sa.String(length=20), nullable=False, server_default="MONTHLY"),
        sa.Column("next_billing_date", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_tenant_subscriptions_tenant_id", "tenant_subscriptions", ["tenant_id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_tenant_subscriptions_tenant_id", table_name="tenant_subscriptions")
    op.drop_table("tenant_subscriptions")
    op.drop_index("ix_tenant_preferences_tenant_id", table_name="tenant_preferences")
    op.drop_table("tenant_preferences")
    op.drop_index("ix_tenant_users_email", table_name="tenant_users")
    op.drop_index("ix_tenant_users_tenant_id", table_name="tenant_users")
    op.drop_table("tenant_users")
    op.drop_index("ix_tenants_subdomain", table_name="tenants")
    op.drop_table("tenants")
