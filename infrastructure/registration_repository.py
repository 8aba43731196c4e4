from sqlalchemy.orm import Session

from core.models.client import Client as ClientModel
from core.models.user import User as UserModel
from domain.registration.entities import Identity, Profile
from domain.registration.repository import RegistrationRepository


class SqlAlchemyRegistrationRepository(RegistrationRepository):
    """Identity/Profile の INSERT を担当する。コミットは行わない。"""

    def __init__(self, session: Session):
        self.session = session

    def add_identity(self, identity: Identity) -> int:
        model = UserModel(
            email=identity.email,
            password=identity.credential,
            status=identity.status,
            role_id=identity.role_id,
        )
        self.session.add(model)
        # flush で採番されたキーを取得 (SQL Server では OUTPUT inserted が使われる)
        self.session.flush()
        return model.id

    def add_profile(self, profile: Profile) -> int:
        model = ClientModel(
            first_name=profile.first_name,
            last_name=profile.last_name,
            document_type=profile.document_type,
            document_number=profile.document_number,
            email=profile.email,
            phone=profile.phone,
            address=profile.address,
            avatar=profile.avatar,
            status=profile.status,
            user_id=profile.identity_id,
        )
        self.session.add(model)
        self.session.flush()
        return model.id
