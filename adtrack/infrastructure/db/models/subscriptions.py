from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from adtrack.infrastructure.db.engine import Base


class UserModel(Base):
    __tablename__ = "users"
    __table_args__ = ({"schema": "public"},)

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
    role: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'user'"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=text("now()"))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=text("now()"))


class SubscriptionPlanModel(Base):
    __tablename__ = "subscription_plans"
    __table_args__ = ({"schema": "public"},)

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True)
    code: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))


class UserSubscriptionModel(Base):
    __tablename__ = "user_subscriptions"
    __table_args__ = (
        Index("ix_user_subscriptions_user_active", "user_id", "is_active"),
        {"schema": "public"},
    )

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True)
    user_id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), ForeignKey("public.users.id"), nullable=False)
    plan_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True), ForeignKey("public.subscription_plans.id"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
    current_period_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    current_period_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=text("now()"))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=text("now()"))


class FeatureModel(Base):
    __tablename__ = "features"
    __table_args__ = ({"schema": "public"},)

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    limits: Mapped[dict] = mapped_column(JSONB, nullable=False, server_default=text("'{}'::jsonb"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=text("now()"))


class FeatureAccessModel(Base):
    __tablename__ = "feature_access"
    __table_args__ = (
        CheckConstraint("level IN ('none', 'limited', 'full')", name="ck_feature_access_level"),
        CheckConstraint(
            "level <> 'limited' OR (usage_limit IS NOT NULL AND usage_limit >= 0)",
            name="ck_feature_access_limited_has_limit",
        ),
        {"schema": "public"},
    )

    plan_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True), ForeignKey("public.subscription_plans.id"), primary_key=True
    )
    feature_key: Mapped[str] = mapped_column(Text, ForeignKey("public.features.key"), primary_key=True)
    level: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("'none'"))
    usage_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)


class FeatureUsageModel(Base):
    __tablename__ = "feature_usage"
    __table_args__ = (
        UniqueConstraint("user_id", "feature_key", "period_start", name="uq_feature_usage_user_feature_period"),
        {"schema": "public"},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), ForeignKey("public.users.id"), nullable=False)
    feature_key: Mapped[str] = mapped_column(Text, ForeignKey("public.features.key"), nullable=False)
    subscription_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True), ForeignKey("public.user_subscriptions.id"), nullable=False
    )
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    period_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class FeatureInteractionModel(Base):
    __tablename__ = "feature_interactions"
    __table_args__ = (
        Index("ix_feature_interactions_feature_type", "feature_key", "interaction_type"),
        {"schema": "public"},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), ForeignKey("public.users.id"), nullable=False)
    feature_key: Mapped[str] = mapped_column(Text, ForeignKey("public.features.key"), nullable=False)
    interaction_type: Mapped[str] = mapped_column(Text, nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=text("now()"))
