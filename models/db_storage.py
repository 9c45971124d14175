from models.user import User
from models.refresh_token import RefreshToken
from models.tenant import Tenant
from models.plan import Plan
from sqlalchemy import create_engine, event, update
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.pool import StaticPool
from models.base_model import Base
from models.errors import DuplicateKeyError

# Map model names for easy querying
classes = {
    "User": User,
    "RefreshToken": RefreshToken,
    "Tenant": Tenant,
    "Plan": Plan,
}


class DBStorage:
    """
    SQLAlchemy-backed record store.

    Generic helpers (new/save/get/delete) serve the tenant and plan
    blueprints; the find_*/create_*/mark_* methods are the credential-store
    surface the auth package depends on. Writes that belong to one unit of
    work are staged with new()/flush and committed together by save().
    """
    __engine = None
    __session = None

    def __init__(self, database_url: str | None = None, echo: bool = False):
        if database_url:
            self.configure(database_url, echo=echo)

    def configure(self, database_url: str, echo: bool = False):
        """Create the engine for database_url (sqlite or any SQLAlchemy URL)."""
        if self.__session is not None:
            self.__session.remove()
        if self.__engine is not None:
            self.__engine.dispose()

        kwargs = {"echo": echo}
        if database_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if database_url in ("sqlite://", "sqlite:///:memory:"):
                # one shared connection, otherwise every checkout sees an empty database
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True
        self.__engine = create_engine(database_url, **kwargs)

        if self.__engine.url.get_backend_name() == "sqlite":
            # Enable SQLite foreign keys (needed for ON DELETE CASCADE)
            @event.listens_for(self.__engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

    def reload(self):
        """Create tables and start session"""
        if self.__engine is None:
            raise RuntimeError("DBStorage.configure() must be called before reload()")
        Base.metadata.create_all(self.__engine)
        session_factory = sessionmaker(bind=self.__engine, expire_on_commit=False)
        self.__session = scoped_session(session_factory)

    def drop_all(self):
        """Drop every table (used by tests)."""
        Base.metadata.drop_all(self.__engine)

    def new(self, obj):
        """Add object to session"""
        self.__session.add(obj)

    def save(self):
        """Commit session"""
        try:
            self.__session.commit()
        except SQLAlchemyError:
            self.__session.rollback()
            raise

    def rollback(self):
        self.__session.rollback()

    def delete(self, obj=None):
        """Delete object if exists (hard delete)"""
        if obj:
            self.__session.delete(obj)

    def get(self, cls, id):
        """Fetch one object by class and ID"""
        if cls in classes.values():
            return self.__session.get(cls, id)
        return None

    def count(self, cls):
        return self.__session.query(cls).count()

    def close(self):
        """Remove session (for API teardown)"""
        if self.__session is not None:
            self.__session.remove()

    # expose the SQLAlchemy session for advanced querying (joins, filters, etc.)
    def get_session(self):
        return self.__session

    # -- credential store -------------------------------------------------

    def find_user_by_email(self, email: str):
        return self.__session.query(User).filter(User.email == email).first()

    def find_user_by_id(self, user_id: str):
        return self.__session.get(User, user_id)

    def create_user(self, email: str, password_hash: str, name: str | None = None) -> User:
        """Insert and commit a user; a taken email raises DuplicateKeyError."""
        user = User(email=email, password_hash=password_hash, name=name)
        self.new(user)
        try:
            self.save()
        except IntegrityError as exc:
            raise DuplicateKeyError(f"users.email already exists: {email}") from exc
        return user

    def find_refresh_token_by_id(self, token_id: str):
        return self.__session.get(RefreshToken, token_id)

    def create_refresh_token(self, user_id: str, token_hash: str, expires_at) -> RefreshToken:
        """Stage a refresh-token row; the caller commits with save()."""
        row = RefreshToken(user_id=user_id, token_hash=token_hash, expires_at=expires_at, revoked=False)
        self.new(row)
        self.__session.flush()
        return row

    def mark_refresh_token_revoked(self, token_id: str) -> None:
        """Stage revoked=True for a row, whatever its current state."""
        self.__session.execute(
            update(RefreshToken).where(RefreshToken.id == token_id).values(revoked=True)
        )

    def conditional_mark_revoked(self, token_id: str) -> bool:
        """
        Stage revoked=True only if the row is still unrevoked.
        Returns False when another caller got there first.
        """
        result = self.__session.execute(
            update(RefreshToken)
            .where(RefreshToken.id == token_id, RefreshToken.revoked == False)  # noqa: E712
            .values(revoked=True)
        )
        return result.rowcount == 1
