"""Patient model definition."""

from utils.clock import utcnow

from . import db


class Patient(db.Model):
    """A clinic patient, keyed by the identifier printed on their card."""

    __tablename__ = "patients"

    id = db.Column(db.String(128), primary_key=True)
    card_number = db.Column(db.String(64), nullable=False, default="")
    name = db.Column(db.String(120), nullable=False)
    age = db.Column(db.Integer, nullable=False, default=0)
    phone_number = db.Column(db.String(32), nullable=False, default="")
    cnic = db.Column(db.String(32), nullable=False, default="")
    comments = db.Column(db.Text, nullable=False, default="")
    last_visit_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    SEARCHABLE_FIELDS = ("id", "name", "card_number", "phone_number", "cnic")

    def to_dict(self) -> dict:
        """Serialize the patient into a dictionary."""

        return {
            "id": self.id,
            "card_number": self.card_number,
            "name": self.name,
            "age": self.age,
            "phone_number": self.phone_number,
            "cnic": self.cnic,
            "comments": self.comments,
            "last_visit_at": self.last_visit_at.isoformat() if self.last_visit_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<Patient id={self.id} name={self.name}>"
