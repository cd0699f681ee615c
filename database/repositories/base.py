from sqlalchemy.orm import Session


class BaseRepository:
    def __init__(self, db: Session, list_cap: int = 500):
        self.db = db
        self.list_cap = list_cap

    def flush(self) -> None:
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
