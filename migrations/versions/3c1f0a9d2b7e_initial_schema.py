"""initial_schema

Create the schema for the Q&A service:
- Users (profiles keyed by the identity provider's user id)
- Questions (tagged, with denormalized vote/view/answer counters)
- Answers (at most one accepted per question, AI answers flagged)
- Votes (one signed vote per user and target)
- Notifications
- The reserved AI assistant user

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-17 09:12:44.310518

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

AI_ASSISTANT_USER_ID = "00000000-0000-4000-8000-0000000000a1"


def _create_enum(name: str, values: Sequence[str]) -> None:
    labels = ", ".join(f"'{value}'" for value in values)
    op.execute(f"""
        DO $$ BEGIN
            CREATE TYPE {name} AS ENUM ({labels});
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    _create_enum("user_role", ["guest", "user", "admin"])
    _create_enum("target_type", ["question", "answer"])
    _create_enum("notification_type", ["answer", "accepted", "mention", "comment"])

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "role",
            postgresql.ENUM(name="user_role", create_type=False),
            server_default="user",
            nullable=False,
        ),
        sa.Column("reputation", sa.Integer(), server_default="0", nullable=False),
        sa.Column("answer_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "badge", sa.String(length=50), server_default="Newcomer", nullable=False
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.CheckConstraint("reputation >= 0", name="reputation_non_negative"),
        sa.CheckConstraint("answer_count >= 0", name="answer_count_non_negative"),
    )

    # ========================================================================
    # QUESTIONS table
    # ========================================================================
    op.create_table(
        "questions",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(length=35)),
            server_default="{}",
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("vote_total", sa.Integer(), server_default="0", nullable=False),
        sa.Column("view_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("answer_count", sa.Integer(), server_default="0", nullable=False),
        # FK to answers added below, once answers exists
        sa.Column("accepted_answer_id", sa.UUID(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint("view_count >= 0", name="view_count_non_negative"),
        sa.CheckConstraint(
            "answer_count >= 0", name="question_answer_count_non_negative"
        ),
        sa.CheckConstraint("cardinality(tags) BETWEEN 1 AND 5", name="question_tag_count"),
    )

    op.execute("CREATE INDEX idx_questions_created_at ON questions(created_at DESC)")
    op.execute("CREATE INDEX idx_questions_vote_total ON questions(vote_total DESC)")
    op.execute("CREATE INDEX idx_questions_view_count ON questions(view_count DESC)")
    op.create_index("idx_questions_author_id", "questions", ["author_id"])
    op.execute("CREATE INDEX idx_questions_tags ON questions USING GIN (tags)")

    # ========================================================================
    # ANSWERS table
    # ========================================================================
    op.create_table(
        "answers",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("question_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("vote_total", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "is_accepted", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column(
            "is_ai_generated", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
    )

    op.create_index("idx_answers_question_id", "answers", ["question_id"])
    op.create_index("idx_answers_author_id", "answers", ["author_id"])
    # At most one accepted answer per question
    op.execute("""
        CREATE UNIQUE INDEX uq_answers_one_accepted_per_question
        ON answers(question_id)
        WHERE is_accepted
    """)

    op.create_foreign_key(
        "fk_questions_accepted_answer_id",
        "questions",
        "answers",
        ["accepted_answer_id"],
        ["id"],
        ondelete="SET NULL",
    )

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "target_type",
            postgresql.ENUM(name="target_type", create_type=False),
            nullable=False,
        ),
        # Polymorphic target, no FK
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "user_id", "target_type", "target_id", name="uq_user_target_vote"
        ),
        sa.CheckConstraint("value IN (1, -1)", name="vote_value_sign"),
    )

    op.create_index("idx_votes_target", "votes", ["target_type", "target_id"])

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "type",
            postgresql.ENUM(name="notification_type", create_type=False),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("question_id", sa.UUID(), nullable=True),
        sa.Column("answer_id", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["answer_id"], ["answers.id"], ondelete="CASCADE"),
    )

    op.execute("""
        CREATE INDEX idx_notifications_user_created
        ON notifications(user_id, created_at DESC)
    """)
    op.execute("""
        CREATE INDEX idx_notifications_unread
        ON notifications(user_id)
        WHERE NOT is_read
    """)

    # ========================================================================
    # Seed the AI assistant, author of every AI-generated answer
    # ========================================================================
    op.execute(f"""
        INSERT INTO users (id, username, email, role)
        VALUES ('{AI_ASSISTANT_USER_ID}', 'ai-assistant', 'ai-assistant@localhost', 'user')
        ON CONFLICT (id) DO NOTHING
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("notifications")
    op.drop_table("votes")
    op.drop_constraint(
        "fk_questions_accepted_answer_id", "questions", type_="foreignkey"
    )
    op.drop_table("answers")
    op.drop_table("questions")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS notification_type")
    op.execute("DROP TYPE IF EXISTS target_type")
    op.execute("DROP TYPE IF EXISTS user_role")
