"""
RecipeProcessingRun model — one row per attempt to turn a social post into a recipe.

Rows are written by the extraction pipeline. The dashboard reads them and
only ever writes the feedback column.
"""
from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from recipe_dashboard.database import Base


class Sender(Base):
    __tablename__ = 'sender'

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=True)

    def to_dict(self):
        return {'id': self.id, 'name': self.name}


class RecipeProcessingRun(Base):
    __tablename__ = 'recipe_processing_run'

    id = Column(Integer, primary_key=True, autoincrement=True)
    phone_number = Column(Text, nullable=False)
    content_id = Column(Text, nullable=True)
    platform = Column(Text, nullable=False)           # Instagram / TikTok / YouTube
    url = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default='pending')
    recipe_id = Column(Integer, nullable=True)        # set once extraction succeeds
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    user_id = Column(Text, ForeignKey('sender.id'), nullable=True)
    run_id = Column(Text, nullable=True)              # upstream correlation id
    good_recipe = Column(Boolean, nullable=True)
    feedback = Column(Text, nullable=True)

    sender = relationship(Sender, lazy='joined')

    __table_args__ = (
        Index('ix_recipe_processing_run_created_at', 'created_at'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'phone_number': self.phone_number,
            'content_id': self.content_id,
            'platform': self.platform,
            'url': self.url,
            'status': self.status,
            'recipe_id': self.recipe_id,
            'error_message': self.error_message,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'user_id': self.user_id,
            'run_id': self.run_id,
            'good_recipe': self.good_recipe,
            'feedback': self.feedback,
            'sender': self.sender.to_dict() if self.sender else None,
        }
