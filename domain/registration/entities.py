from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Identity:
    """ログイン資格情報とロールを保持するアカウント。"""

    email: str
    credential: str = field(repr=False)
    status: str
    role_id: Optional[int]


@dataclass
class Profile:
    """Identity に従属する個人・連絡先情報。"""

    first_name: Optional[str]
    last_name: Optional[str]
    document_type: Optional[str]
    document_number: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    avatar: Optional[str]
    status: Optional[str]
    identity_id: int
