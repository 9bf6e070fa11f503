# agent_admin/models.py
from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone
import uuid

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    # stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Panchayath(Base):
    __tablename__ = 'panchayaths'
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(191), nullable=False)
    district = Column(String(191), nullable=False)
    number_of_wards = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=_utcnow)

class Agent(Base):
    __tablename__ = 'agents'
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(191), nullable=False)
    phone_number = Column(String(32), nullable=False)
    role = Column(String(20), nullable=False)  # coordinator, supervisor, group_leader, pro
    superior_id = Column(String(36), ForeignKey('agents.id', ondelete='SET NULL'), nullable=True)
    panchayath_id = Column(String(36), ForeignKey('panchayaths.id'), nullable=False)
    ward = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

class Task(Base):
    __tablename__ = 'tasks'
    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default='')
    priority = Column(String(10), nullable=False, default='normal')  # normal, medium, high
    due_date = Column(DateTime, nullable=False)
    allocation_type = Column(String(12), nullable=False)  # individual, team
    assigned_to = Column(String(36), nullable=False)
    assigned_to_name = Column(String(191), nullable=False)
    status = Column(String(12), nullable=False, default='pending')  # pending, completed, cancelled
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
    completed_at = Column(DateTime, nullable=True)

class Team(Base):
    __tablename__ = 'teams'
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(191), nullable=False)
    description = Column(Text, nullable=False, default='')
    created_at = Column(DateTime, default=_utcnow)

class TeamMember(Base):
    __tablename__ = 'team_members'
    id = Column(String(36), primary_key=True, default=_uuid)
    team_id = Column(String(36), ForeignKey('teams.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(191), nullable=False)
    phone_number = Column(String(32), nullable=False)
    role = Column(String(64), nullable=False)  # "team member" or "<role> + team member"
    panchayath_id = Column(String(36), ForeignKey('panchayaths.id'), nullable=True)
    ward = Column(Integer, nullable=True)
    is_existing_agent = Column(Boolean, nullable=False, default=False)
    agent_id = Column(String(36), ForeignKey('agents.id', ondelete='SET NULL'), nullable=True)
    original_role = Column(String(20), nullable=True)
    created_at = Column(DateTime, default=_utcnow)

class PointsRule(Base):
    __tablename__ = 'points_rules'
    role = Column(String(20), primary_key=True)
    daily_points = Column(Integer, nullable=False, default=0)
    bonus_points_allowed = Column(Boolean, nullable=False, default=True)

class DailyActivity(Base):
    __tablename__ = 'daily_activities'
    __table_args__ = (UniqueConstraint('agent_id', 'activity_date', name='ux_activity_agent_day'),)
    id = Column(String(36), primary_key=True, default=_uuid)
    agent_id = Column(String(36), ForeignKey('agents.id', ondelete='CASCADE'), nullable=False)
    activity_date = Column(Date, nullable=False)
    status = Column(String(10), nullable=False, default='present')  # present, leave
    notes = Column(Text, nullable=False, default='')
    bonus_points = Column(Integer, nullable=False, default=0)
    points = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
