"""link_customers_to_users

Revision ID: 9c3f6a2e8d17
Revises: 5b1e0c7d2a41
Create Date: 2026-10-19 16:40:02.551873
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9c3f6a2e8d17'
down_revision: Union[str, Sequence[str], None] = '5b1e0c7d2a41'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    with op.batch_alter_table("customers") as batch_op:
        batch_op.add_column(sa.Column("user_id", sa.Integer(), nullable=True))
        batch_op.create_foreign_key(
            "fk_customers_user_id_users",
            "users",
            ["user_id"],
            ["id"],
            ondelete="SET NULL",
        )
        batch_op.create_index("ix_customers_user_id", ["user_id"], unique=True)


def downgrade() -> None:
    """Downgrade schema."""

    with op.batch_alter_table("customers") as batch_op:
        batch_op.drop_index("ix_customers_user_id")
        batch_op.drop_constraint("fk_customers_user_id_users", type_="foreignkey")
        batch_op.drop_column("user_id")
