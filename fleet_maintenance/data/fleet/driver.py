from fleet_maintenance.data.core.user_created_base import UserCreatedBase
from fleet_maintenance import db


class Driver(UserCreatedBase):
    __tablename__ = 'drivers'

    name = db.Column(db.String(200), nullable=False)
    document_number = db.Column(db.String(20), unique=True, nullable=False)
    license_number = db.Column(db.String(20), unique=True, nullable=False)
    license_category = db.Column(db.String(5), nullable=False)
    license_expiry = db.Column(db.Date, nullable=False)
    phone = db.Column(db.String(30), nullable=True)
    email = db.Column(db.String(120), nullable=True)
    status = db.Column(db.String(20), nullable=False, default='active')  # active/vacation/inactive

    def __repr__(self):
        return f'<Driver {self.name}>'
