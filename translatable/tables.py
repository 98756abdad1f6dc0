from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)

metadata = MetaData()

# Owned by the host application; declared so the foreign key resolves.
users_table = Table(
    "users",
    metadata,
    Column("id", Uuid, primary_key=True),
)

translations_table = Table(
    "translations",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    # Polymorphic reference: (translatable_id, translatable) points at a row
    # in whichever host table the type names, so there is no foreign key.
    Column("translatable_id", Uuid, nullable=False),
    Column("translatable", Text, nullable=False),
    Column("locale", String(16), nullable=True),
    Column("content", Text, nullable=False),
    Column(
        "created_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    ),
    Column("updated_at", DateTime(timezone=True), nullable=True),
    UniqueConstraint(
        "translatable_id",
        "translatable",
        "locale",
        name="uq_translations_resource_locale",
    ),
)

Index(
    "ix_translations_lookup",
    translations_table.c.translatable_id,
    translations_table.c.translatable,
    translations_table.c.locale,
)
Index("ix_translations_user_id", translations_table.c.user_id)
Index("ix_translations_created_at", translations_table.c.created_at.desc())
