from maquirent import db
from datetime import datetime


class StorageSlot(db.Model):
    """
    One named slot of key/value storage.

    Each entity collection is kept as a JSON document under a fixed key
    (e.g. 'machinery', 'notifications'), mirroring device local storage.
    """
    __tablename__ = 'storage_slots'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False, default='null')
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<StorageSlot {self.key}>'
