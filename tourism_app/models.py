# tourism_app/models.py
from tourism_app.extensions import db


class Location(db.Model):
    __tablename__ = 'locations'
    province = db.Column(db.String(64), primary_key=True)
    city     = db.Column(db.String(64), primary_key=True)


class AttractionSite(db.Model):
    """Координаты достопримечательности и её локация."""
    __tablename__ = 'attraction_sites'
    latitude  = db.Column(db.Float, primary_key=True)
    longitude = db.Column(db.Float, primary_key=True)
    province  = db.Column(db.String(64), nullable=False)
    city      = db.Column(db.String(64), nullable=False)

    __table_args__ = (
        db.ForeignKeyConstraint(
            ['province', 'city'], ['locations.province', 'locations.city']
        ),
    )


class Attraction(db.Model):
    __tablename__ = 'attractions'
    attraction_id   = db.Column(db.Integer, primary_key=True, autoincrement=True)
    attraction_name = db.Column(db.String(128), nullable=False)
    attraction_desc = db.Column(db.Text)
    category        = db.Column(db.String(32))
    opening_hour    = db.Column(db.String(16))
    closing_hour    = db.Column(db.String(16))
    latitude        = db.Column(db.Float, nullable=False)
    longitude       = db.Column(db.Float, nullable=False)

    __table_args__ = (
        db.ForeignKeyConstraint(
            ['latitude', 'longitude'],
            ['attraction_sites.latitude', 'attraction_sites.longitude']
        ),
    )


class Experience(db.Model):
    __tablename__ = 'experiences'
    experience_id   = db.Column(db.Integer, primary_key=True)
    experience_name = db.Column(db.String(128), nullable=False)
    experience_desc = db.Column(db.Text)
    company         = db.Column(db.String(128))
    price           = db.Column(db.Float)
    attraction_id   = db.Column(
        db.Integer, db.ForeignKey('attractions.attraction_id'), nullable=False
    )


class AppUser(db.Model):
    __tablename__ = 'app_users'
    user_id   = db.Column(db.Integer, primary_key=True)
    user_name = db.Column(db.String(64), nullable=False)


class Participation(db.Model):
    """Какие впечатления посетил пользователь."""
    __tablename__ = 'participations'
    user_id       = db.Column(db.Integer, db.ForeignKey('app_users.user_id'), primary_key=True)
    experience_id = db.Column(db.Integer, db.ForeignKey('experiences.experience_id'), primary_key=True)


class DemoTable(db.Model):
    __tablename__ = 'demotable'
    id   = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(64))
