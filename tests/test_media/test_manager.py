"""Tests for ItemCatalog."""

import pytest

from libraryserver.db.schemas import UpsertOutcome
from libraryserver.exceptions import BadRequestError, ConflictError, NotFoundError
from libraryserver.loans.schemas import CustomerRef, LoanCreate, MediumRef
from libraryserver.media.manager import ItemCatalog
from libraryserver.media.schemas import MediumCreate, MediumUpdate


class TestCatalog:
    """Tests for creating and reading media."""

    def test_create_medium(self, catalog, sample_medium_data):
        """Test creating a medium stores every field."""
        medium = catalog.create(sample_medium_data)

        assert medium.id is not None
        assert medium.title == "Lord of the Rings"
        assert medium.author == "J.R.R. Tolkien"
        assert medium.genre == "Fantasy"
        assert medium.age_rating == 13
        assert medium.catalog_number == 9803478347812
        assert medium.shelf_location == "A1"

    def test_create_minimal(self, catalog):
        """Test title and author are enough."""
        medium = catalog.create(MediumCreate(title="Dune", author="Frank Herbert"))

        assert medium.genre is None
        assert medium.shelf_location is None

    @pytest.mark.parametrize(
        "data",
        [
            MediumCreate(author="Frank Herbert"),
            MediumCreate(title="Dune"),
            MediumCreate(genre="Science Fiction"),
        ],
    )
    def test_create_without_title_or_author(self, catalog, data):
        """Test title and author are required."""
        with pytest.raises(BadRequestError):
            catalog.create(data)
        assert catalog.list_all() == []

    def test_get(self, catalog, sample_medium):
        """Test getting a medium by ID."""
        assert catalog.get(sample_medium.id).title == "Lord of the Rings"

    def test_get_not_found(self, catalog):
        """Test getting an unknown medium."""
        with pytest.raises(NotFoundError):
            catalog.get(999)

    def test_find_by_title(self, catalog, sample_medium):
        """Test exact title lookup."""
        catalog.create(MediumCreate(title="Dune", author="Frank Herbert"))

        result = catalog.find_by_title("Dune")
        assert [m.title for m in result] == ["Dune"]
        assert catalog.find_by_title("Lord") == []

    def test_list_all(self, catalog, sample_medium):
        """Test listing every medium."""
        catalog.create(MediumCreate(title="Dune", author="Frank Herbert"))
        assert len(catalog.list_all()) == 2


class TestUpsert:
    """Tests for patching media."""

    def test_patch_fields(self, catalog, sample_medium):
        """Test patchable fields are overwritten one by one."""
        result = catalog.upsert(sample_medium.id, MediumUpdate(genre="Epic", shelf_location="B7"))

        assert result.outcome == UpsertOutcome.UPDATED
        medium = catalog.get(sample_medium.id)
        assert medium.genre == "Epic"
        assert medium.shelf_location == "B7"
        # Untouched fields
        assert medium.age_rating == 13
        assert medium.catalog_number == 9803478347812

    def test_title_and_author_immutable(self, catalog, sample_medium):
        """Test title and author are ignored on an existing medium."""
        catalog.update(sample_medium.id, MediumUpdate(title="The Hobbit", author="Someone"))

        medium = catalog.get(sample_medium.id)
        assert medium.title == "Lord of the Rings"
        assert medium.author == "J.R.R. Tolkien"

    def test_unknown_id_creates(self, catalog):
        """Test upserting an unknown ID creates the medium."""
        result = catalog.upsert(77, MediumUpdate(title="Dune", author="Frank Herbert", genre="SF"))

        assert result.created
        assert result.record.genre == "SF"
        assert catalog.get(result.record.id).title == "Dune"

    def test_unknown_id_incomplete(self, catalog):
        """Test the create fallback still needs title and author."""
        with pytest.raises(BadRequestError):
            catalog.update(77, MediumUpdate(genre="SF"))


class TestDelete:
    """Tests for deleting media."""

    def test_delete(self, catalog, sample_medium):
        """Test deleting a medium."""
        catalog.delete(sample_medium.id)

        with pytest.raises(NotFoundError):
            catalog.get(sample_medium.id)

    def test_delete_on_loan_guarded(self, db, loans, sample_customer, sample_medium):
        """Test the guard refuses deleting a medium that is on loan."""
        guarded = ItemCatalog(db, guard_loan_references=True)
        loans.create(
            LoanCreate(customer=CustomerRef(id=sample_customer.id), medium=MediumRef(id=sample_medium.id))
        )

        with pytest.raises(ConflictError):
            guarded.delete(sample_medium.id)

        loans.delete_by_medium_id(sample_medium.id)
        guarded.delete(sample_medium.id)
        assert guarded.list_all() == []
