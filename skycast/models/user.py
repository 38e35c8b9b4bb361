from skycast.extensions import db

USERNAME_MAX_LENGTH = 100


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(USERNAME_MAX_LENGTH), nullable=False, unique=True)

    locations = db.relationship(
        'Location',
        back_populates='user',
        cascade='all, delete-orphan',
        order_by='Location.id',
    )

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }
