"""
CRM Service for companies, contacts and their interactions

Callers normalize and validate input (see sparkboard.forms) before calling
create_* / update_*; the store never re-normalizes.
"""
import logging

from sparkboard.models.company import COMPANY_STATUSES, COMPANY_SIZES, Company
from sparkboard.models.contact import CONTACT_STATUSES, Contact
from sparkboard.models.interaction import INTERACTION_OUTCOMES, INTERACTION_TYPES, Interaction
from sparkboard.models.base import check_choice


logger = logging.getLogger(__name__)

# Never taken from a partial update
PROTECTED_FIELDS = frozenset({'id', 'created_at'})


def _merge(entity, partial, allowed):
    """Copy known, non-protected keys from partial onto entity"""
    for key, value in (partial or {}).items():
        if key in PROTECTED_FIELDS:
            continue
        if key not in allowed:
            logger.debug("Ignoring unknown field %r for %r", key, entity)
            continue
        setattr(entity, key, value)
    return entity


def _matches(term, *values):
    term = (term or '').lower()
    return any(term in (value or '').lower() for value in values)


class CRMStore:
    """In-memory collection of companies, contacts and interactions for one session"""

    def __init__(self):
        self.companies = []
        self.contacts = []
        self.interactions = []

    def __repr__(self):
        return (f'<CRMStore companies={len(self.companies)} contacts={len(self.contacts)} '
                f'interactions={len(self.interactions)}>')

    # -------------------- companies --------------------
    def create_company(self, fields):
        """
        Create a company

        Args:
            fields: dict of normalized company fields (name, email, phone, ...)

        Returns:
            Company: the created company
        """
        fields = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        company = Company(**fields)

        if self.find_companies_by_name(company.name):
            logger.warning(
                "Company name %r is already in use; contacts cannot tell these companies apart",
                company.name
            )

        self.companies.append(company)
        logger.debug("Created %r", company)
        return company

    def get_company(self, company_id):
        return next((c for c in self.companies if c.id == company_id), None)

    def update_company(self, company_id, partial):
        """Merge partial fields into a company; None when the id is unknown"""
        company = self.get_company(company_id)
        if company is None:
            logger.debug("update_company: no company %s", company_id)
            return None

        if 'status' in partial:
            check_choice(partial['status'], COMPANY_STATUSES, 'company status')
        if partial.get('size'):
            check_choice(partial['size'], COMPANY_SIZES, 'company size')

        return _merge(company, partial, Company.field_names())

    def delete_company(self, company_id):
        """
        Remove a company. Contacts keep their company name; they simply stop
        resolving to a company until one with that name exists again.
        """
        company = self.get_company(company_id)
        if company is None:
            return False
        self.companies = [c for c in self.companies if c.id != company_id]
        logger.debug("Deleted %r", company)
        return True

    def find_companies_by_name(self, name):
        return [c for c in self.companies if c.name == name]

    def contacts_for_company(self, company):
        """Contacts whose company name matches, in insertion order"""
        return [c for c in self.contacts if c.company == company.name]

    def company_for_contact(self, contact):
        """First company carrying the contact's company name, or None"""
        matches = self.find_companies_by_name(contact.company)
        return matches[0] if matches else None

    # -------------------- contacts --------------------
    def create_contact(self, fields):
        """
        Create a contact

        Args:
            fields: dict of normalized contact fields; `company` is a company name

        Returns:
            Contact: the created contact
        """
        fields = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        contact = Contact(**fields)
        self.contacts.append(contact)
        logger.debug("Created %r", contact)
        return contact

    def get_contact(self, contact_id):
        return next((c for c in self.contacts if c.id == contact_id), None)

    def update_contact(self, contact_id, partial):
        """Merge partial fields into a contact; None when the id is unknown"""
        contact = self.get_contact(contact_id)
        if contact is None:
            logger.debug("update_contact: no contact %s", contact_id)
            return None

        if 'status' in partial:
            check_choice(partial['status'], CONTACT_STATUSES, 'contact status')

        partial = dict(partial)
        if 'tags' in partial:
            # Tags stay a set: rebuild through add_tag to drop duplicates
            tags = partial.pop('tags') or []
            contact.tags = []
            for tag in tags:
                contact.add_tag(tag)

        _merge(contact, partial, Contact.field_names())

        if 'name' in partial:
            for interaction in self.interactions_for_contact(contact.id):
                interaction.contact_name = contact.name

        return contact

    def delete_contact(self, contact_id):
        """Remove a contact together with the interactions it owns"""
        contact = self.get_contact(contact_id)
        if contact is None:
            return False
        self.contacts = [c for c in self.contacts if c.id != contact_id]
        self.interactions = [i for i in self.interactions if i.contact_id != contact_id]
        logger.debug("Deleted %r and its interactions", contact)
        return True

    def add_contact_tag(self, contact_id, tag):
        contact = self.get_contact(contact_id)
        if contact is None:
            return False
        return contact.add_tag(tag)

    def remove_contact_tag(self, contact_id, tag):
        contact = self.get_contact(contact_id)
        if contact is None:
            return False
        return contact.remove_tag(tag)

    # -------------------- interactions --------------------
    def create_interaction(self, fields):
        """
        Log an interaction against an existing contact

        Args:
            fields: dict with contact_id, subject, description, date, ...

        Returns:
            Interaction: the created interaction, or None if the contact does not exist
        """
        fields = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        contact = self.get_contact(fields.get('contact_id'))
        if contact is None:
            logger.debug("create_interaction: no contact %s", fields.get('contact_id'))
            return None

        fields['contact_name'] = contact.name
        interaction = Interaction(**fields)
        self.interactions.append(interaction)
        logger.debug("Created %r for %r", interaction, contact)
        return interaction

    def get_interaction(self, interaction_id):
        return next((i for i in self.interactions if i.id == interaction_id), None)

    def update_interaction(self, interaction_id, partial):
        """Merge partial fields into an interaction; None when the id is unknown"""
        interaction = self.get_interaction(interaction_id)
        if interaction is None:
            logger.debug("update_interaction: no interaction %s", interaction_id)
            return None

        partial = dict(partial)
        if 'type' in partial:
            check_choice(partial['type'], INTERACTION_TYPES, 'interaction type')
        if 'outcome' in partial:
            check_choice(partial['outcome'], INTERACTION_OUTCOMES, 'interaction outcome')
        if partial.get('duration') is not None and partial['duration'] < 0:
            raise ValueError(f"Invalid interaction duration {partial['duration']!r}; must be >= 0")

        if 'contact_id' in partial:
            contact = self.get_contact(partial['contact_id'])
            if contact is None:
                logger.debug("update_interaction: no contact %s", partial['contact_id'])
                return None
            partial['contact_name'] = contact.name

        return _merge(interaction, partial, Interaction.field_names())

    def delete_interaction(self, interaction_id):
        if self.get_interaction(interaction_id) is None:
            return False
        self.interactions = [i for i in self.interactions if i.id != interaction_id]
        return True

    def interactions_for_contact(self, contact_id):
        """A contact's interactions, newest first"""
        owned = [i for i in self.interactions if i.contact_id == contact_id]
        return sorted(owned, key=lambda i: i.date, reverse=True)

    # -------------------- queries --------------------
    def search_contacts(self, term='', status='all'):
        """Case-insensitive match on name, company or email, optionally by status"""
        return [
            c for c in self.contacts
            if _matches(term, c.name, c.company, c.email)
            and (status == 'all' or c.status == status)
        ]

    def search_companies(self, term='', status='all'):
        """Case-insensitive match on name or industry, optionally by status"""
        return [
            c for c in self.companies
            if _matches(term, c.name, c.industry)
            and (status == 'all' or c.status == status)
        ]

    def summary(self):
        """Headline counts for the CRM dashboard"""
        return {
            'companies': len(self.companies),
            'contacts': len(self.contacts),
            'customers': len([c for c in self.contacts if c.status == 'customer']),
            'interactions': len(self.interactions),
        }
