"""create images table

One metadata row per uploaded photo. The id is the blob store's id, so the
table has no foreign keys; ownership is by username.

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-19 09:12:41.318204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "a1c3e5f7b9d2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "images",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("caption", sa.Text(), nullable=True),
        sa.Column("captured", sa.DateTime(timezone=True), nullable=False),
        sa.Column("uploaded", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_images")),
    )
    # Listing scans by captured, name lookups break ties by uploaded
    op.create_index(
        "idx_images_username_captured", "images", ["username", "captured"]
    )
    op.create_index(
        "idx_images_username_uploaded", "images", ["username", "uploaded"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_images_username_uploaded", table_name="images")
    op.drop_index("idx_images_username_captured", table_name="images")
    op.drop_table("images")
