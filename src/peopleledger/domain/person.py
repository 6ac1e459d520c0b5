"""Person domain service."""

import logging
import math
from typing import Optional

from peopleledger.database.base import Database
from peopleledger.domain.entities import Account as AccountEntity
from peopleledger.domain.entities import Person as PersonEntity
from peopleledger.domain.entities import PersonPage
from peopleledger.domain.errors import (
    DuplicateIdNumberError,
    HasActiveAccountsError,
    NotFoundError,
    collect,
    duplicate_id_number,
    person_delete_blocked,
    person_not_found,
)
from peopleledger.domain.validation import (
    ID_NUMBER_MAX_LENGTH,
    NAME_MAX_LENGTH,
    check_text,
    clean_text,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class PersonService:
    """Service for managing persons."""

    def __init__(self, db: Database):
        """Initialize person service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate(self, name: Optional[str], surname: Optional[str], id_number: Optional[str]) -> None:
        errors = check_text(name, "Name", NAME_MAX_LENGTH)
        errors += check_text(surname, "Surname", NAME_MAX_LENGTH)
        errors += check_text(id_number, "ID Number", ID_NUMBER_MAX_LENGTH, required=True)
        collect(errors)

    def list_persons(
        self,
        id_number_contains: Optional[str] = None,
        surname_contains: Optional[str] = None,
        account_number_contains: Optional[str] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PersonPage:
        """List one page of persons matching the filters.

        Filters are substring matches combined with AND; blank filters are
        ignored. Persons are sorted by surname, then name. An out-of-range
        page is clamped to the nearest valid page.

        Args:
            id_number_contains: Optional ID number substring
            surname_contains: Optional surname substring
            account_number_contains: Optional substring of any owned account number
            page: 1-based page number
            page_size: Persons per page

        Returns:
            PersonPage with the items and pagination metadata
        """
        if page_size < 1:
            raise ValueError("page_size must be at least 1")

        filters = dict(
            id_number_contains=clean_text(id_number_contains),
            surname_contains=clean_text(surname_contains),
            account_number_contains=clean_text(account_number_contains),
        )
        total_count = self.db.count_persons(**filters)
        total_pages = math.ceil(total_count / page_size)
        page = max(1, min(page, max(total_pages, 1)))

        items = self.db.search_persons(
            **filters, offset=(page - 1) * page_size, limit=page_size
        )
        return PersonPage(
            items=items,
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
        )

    def create_person(
        self, name: Optional[str], surname: Optional[str], id_number: str
    ) -> int:
        """Create a new person.

        Returns:
            Person ID

        Raises:
            ValidationError: If a field is missing or too long
            DuplicateIdNumberError: If the ID number is already in use
        """
        name, surname, id_number = clean_text(name), clean_text(surname), clean_text(id_number)
        self._validate(name, surname, id_number)

        if self.db.find_person_by_id_number(id_number) is not None:
            raise DuplicateIdNumberError(duplicate_id_number(id_number))

        person_id = self.db.create_person(name=name, surname=surname, id_number=id_number)
        logger.info("Person created: %s %s (ID %s)", name, surname, person_id)
        return person_id

    def get_person(self, person_id: int) -> Optional[PersonEntity]:
        """Get person by ID, or None if not found."""
        return self.db.get_person(person_id)

    def require_person(self, person_id: int) -> PersonEntity:
        """Get person by ID or raise NotFoundError."""
        person = self.db.get_person(person_id)
        if person is None:
            raise NotFoundError(person_not_found(person_id))
        return person

    def edit_person(
        self,
        person_id: int,
        name: Optional[str],
        surname: Optional[str],
        id_number: str,
        expected_version: Optional[int] = None,
    ) -> None:
        """Edit a person.

        Args:
            person_id: Person to edit
            name: New given name
            surname: New surname
            id_number: New ID number; may equal the person's current one
            expected_version: Version the caller read; a mismatch is a conflict

        Raises:
            NotFoundError: If the person doesn't exist
            DuplicateIdNumberError: If another person holds the ID number
            ConcurrentModificationError: If the person changed since it was read
        """
        self.require_person(person_id)

        name, surname, id_number = clean_text(name), clean_text(surname), clean_text(id_number)
        self._validate(name, surname, id_number)

        if self.db.find_person_by_id_number(id_number, exclude_id=person_id) is not None:
            raise DuplicateIdNumberError(duplicate_id_number(id_number))

        self.db.update_person(
            person_id=person_id,
            name=name,
            surname=surname,
            id_number=id_number,
            expected_version=expected_version,
        )
        logger.info("Person updated: %s %s (ID %s)", name, surname, person_id)

    def delete_person(self, person_id: int) -> None:
        """Delete a person that owns no accounts.

        Raises:
            NotFoundError: If the person doesn't exist
            HasActiveAccountsError: If the person still owns accounts
        """
        person = self.require_person(person_id)

        account_count = self.db.count_person_accounts(person_id)
        if account_count > 0:
            raise HasActiveAccountsError(person_delete_blocked(person_id, account_count))

        self.db.delete_person(person_id)
        logger.info("Person deleted: %s (ID %s)", person.full_name, person_id)

    def list_accounts_for_person(self, person_id: int) -> list[AccountEntity]:
        """List a person's accounts ordered by account number."""
        self.require_person(person_id)
        return self.db.list_accounts(person_id=person_id)
