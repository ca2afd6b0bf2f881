from fleet_maintenance import db
from datetime import datetime
from fleet_maintenance.buisness.core.data_insertion_mixin import DataInsertionMixin


class User(DataInsertionMixin, db.Model):
    """
    Back office user. Referenced by audit fields only; sign-in and
    permissions live outside this package.
    """
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(200), nullable=True)
    is_active = db.Column(db.Boolean, default=True)
    is_admin = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def display_name(self):
        return self.name or self.username

    def __repr__(self):
        return f'<User {self.username}>'
