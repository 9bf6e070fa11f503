# migrations/versions/20261019_0001_initial.py
# Initial schema: panchayaths, agents, tasks, teams, points and daily activity
from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic.
revision = "20261019_0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "panchayaths",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(191), nullable=False),
        sa.Column("district", sa.String(191), nullable=False),
        sa.Column("number_of_wards", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_panchayaths_name", "panchayaths", ["name"])

    op.create_table(
        "agents",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(191), nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("superior_id", sa.String(36), sa.ForeignKey("agents.id", ondelete="SET NULL"), nullable=True),
        sa.Column("panchayath_id", sa.String(36), sa.ForeignKey("panchayaths.id"), nullable=False),
        sa.Column("ward", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_agents_panchayath_role", "agents", ["panchayath_id", "role"])
    op.create_index("ix_agents_superior", "agents", ["superior_id"])
    op.create_index("ix_agents_phone", "agents", ["phone_number"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("priority", sa.String(10), nullable=False, server_default="normal"),
        sa.Column("due_date", sa.DateTime, nullable=False),
        sa.Column("allocation_type", sa.String(12), nullable=False),
        sa.Column("assigned_to", sa.String(36), nullable=False),
        sa.Column("assigned_to_name", sa.String(191), nullable=False),
        sa.Column("status", sa.String(12), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=True),
        sa.Column("completed_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_tasks_status_due", "tasks", ["status", "due_date"])

    op.create_table(
        "teams",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(191), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=True),
    )

    op.create_table(
        "team_members",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("team_id", sa.String(36), sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("name", sa.String(191), nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=False),
        sa.Column("role", sa.String(64), nullable=False),
        sa.Column("panchayath_id", sa.String(36), sa.ForeignKey("panchayaths.id"), nullable=True),
        sa.Column("ward", sa.Integer, nullable=True),
        sa.Column("is_existing_agent", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("agent_id", sa.String(36), sa.ForeignKey("agents.id", ondelete="SET NULL"), nullable=True),
        sa.Column("original_role", sa.String(20), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_team_members_team_pos", "team_members", ["team_id", "position"])

    op.create_table(
        "points_rules",
        sa.Column("role", sa.String(20), primary_key=True),
        sa.Column("daily_points", sa.Integer, nullable=False, server_default="0"),
        sa.Column("bonus_points_allowed", sa.Boolean, nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "daily_activities",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("agent_id", sa.String(36), sa.ForeignKey("agents.id", ondelete="CASCADE"), nullable=False),
        sa.Column("activity_date", sa.Date, nullable=False),
        sa.Column("status", sa.String(10), nullable=False, server_default="present"),
        sa.Column("notes", sa.Text, nullable=False),
        sa.Column("bonus_points", sa.Integer, nullable=False, server_default="0"),
        sa.Column("points", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=True),
        sa.UniqueConstraint("agent_id", "activity_date", name="ux_activity_agent_day"),
    )


def downgrade():
    op.drop_table("daily_activities")
    op.drop_table("points_rules")
    op.drop_index("ix_team_members_team_pos", table_name="team_members")
    op.drop_table("team_members")
    op.drop_table("teams")
    op.drop_index("ix_tasks_status_due", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("ix_agents_phone", table_name="agents")
    op.drop_index("ix_agents_superior", table_name="agents")
    op.drop_index("ix_agents_panchayath_role", table_name="agents")
    op.drop_table("agents")
    op.drop_index("ix_panchayaths_name", table_name="panchayaths")
    op.drop_table("panchayaths")
