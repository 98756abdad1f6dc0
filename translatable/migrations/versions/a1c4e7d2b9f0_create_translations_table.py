"""create translations table

Revision ID: a1c4e7d2b9f0
Revises:
Create Date: 2026-01-04 00:00:01.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a1c4e7d2b9f0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = ("translatable",)
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    insp = sa.inspect(bind)

    if not insp.has_table("users"):
        raise RuntimeError(
            "translations references users(id); apply the users migration first"
        )
    if insp.has_table("translations"):
        return

    op.create_table(
        "translations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("translatable_id", sa.Uuid(), nullable=False),
        sa.Column("translatable", sa.Text(), nullable=False),
        sa.Column("locale", sa.String(length=16), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "translatable_id",
            "translatable",
            "locale",
            name="uq_translations_resource_locale",
        ),
    )
    op.create_index(
        "ix_translations_lookup",
        "translations",
        ["translatable_id", "translatable", "locale"],
    )
    op.create_index("ix_translations_user_id", "translations", ["user_id"])
    op.create_index(
        "ix_translations_created_at",
        "translations",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("ix_translations_created_at", table_name="translations")
    op.drop_index("ix_translations_user_id", table_name="translations")
    op.drop_index("ix_translations_lookup", table_name="translations")
    op.drop_table("translations")
