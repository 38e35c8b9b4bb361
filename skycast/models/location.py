from skycast.extensions import db

ZIP_MAX_LENGTH = 20


class Location(db.Model):
    __tablename__ = 'locations'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    zip = db.Column(db.String(ZIP_MAX_LENGTH), nullable=True)
    lat = db.Column(db.Float, nullable=True)
    lon = db.Column(db.Float, nullable=True)

    user = db.relationship('User', back_populates='locations')

    __table_args__ = (
        db.Index('ix_locations_user_id', 'user_id'),
    )

    def apply(self, payload):
        """Overwrite all mode fields; switching modes clears the other mode."""
        self.zip = payload.zip
        self.lat = payload.lat
        self.lon = payload.lon

    def projection(self):
        return {'zip': self.zip, 'lat': self.lat, 'lon': self.lon}

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'zip': self.zip,
            'lat': self.lat,
            'lon': self.lon,
        }
