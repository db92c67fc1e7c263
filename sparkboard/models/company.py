from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Optional

from sparkboard.models.base import check_choice, isoformat, new_id
from sparkboard.utils.timezone_utils import utcnow


COMPANY_STATUSES = ('active', 'inactive', 'prospect')
COMPANY_SIZES = ('1-10', '10-50', '50-100', '100-500', '500+')


@dataclass
class Company:
    """Company model - organizations contacts work at

    Contacts point at a company by name (see CRMStore.contacts_for_company),
    so the company holds no list of its own.
    """
    name: str
    email: str = ''
    phone: str = ''  # digits only
    website: str = ''
    address: str = ''
    industry: str = ''
    size: str = ''  # one of COMPANY_SIZES, or empty
    status: str = 'prospect'  # active, inactive, prospect
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        check_choice(self.status, COMPANY_STATUSES, 'company status')
        if self.size:
            check_choice(self.size, COMPANY_SIZES, 'company size')

    def __repr__(self):
        return f'<Company {self.id}: {self.name}>'

    @classmethod
    def field_names(cls):
        return {f.name for f in fields(cls)}

    def to_dict(self, contacts_count: Optional[int] = None):
        """Convert company to dictionary"""
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'website': self.website,
            'address': self.address,
            'industry': self.industry,
            'size': self.size,
            'status': self.status,
            'created_at': isoformat(self.created_at),
        }
        if contacts_count is not None:
            data['contacts'] = contacts_count
        return data
