"""Tests for the person CLI commands."""


def test_create_and_show(run, logged_in):
    result = run("person", "create", "8001015009087", "--name", "Alice", "--surname", "Smith")
    assert result.exit_code == 0
    assert "Created person '8001015009087' (ID: 1)" in result.output

    result = run("person", "show", "1")
    assert result.exit_code == 0
    assert "Alice Smith" in result.output
    assert "No accounts." in result.output


def test_create_duplicate_id_number(run, logged_in, sample_person):
    result = run("person", "create", sample_person.id_number)

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_list_paginates(run, logged_in, person_service):
    for i in range(25):
        person_service.create_person(name=f"N{i:02d}", surname="Doe", id_number=f"ID{i:03d}")

    result = run("person", "list")
    assert result.exit_code == 0
    assert "Page 1 of 3 (25 persons)" in result.output
    assert "ID number: ID009" in result.output
    assert "ID number: ID010" not in result.output

    result = run("person", "list", "--page", "99")
    assert "Page 3 of 3" in result.output
    assert "ID number: ID024" in result.output


def test_list_filters(run, logged_in, person_service, account_service):
    alice = person_service.create_person(name="Alice", surname="Smith", id_number="111")
    person_service.create_person(name="Bob", surname="Jones", id_number="222")
    account_service.create_account(person_id=alice, account_number="ACC-777")

    result = run("person", "list", "--surname", "jon")
    assert "Jones" in result.output
    assert "Smith" not in result.output

    result = run("person", "list", "--account-number", "777")
    assert "Smith" in result.output
    assert "Jones" not in result.output


def test_list_empty(run, logged_in):
    result = run("person", "list")
    assert result.exit_code == 0
    assert "No persons found." in result.output


def test_edit(run, logged_in, sample_person):
    result = run("person", "edit", str(sample_person.id), "--surname", "Jones")
    assert result.exit_code == 0

    result = run("person", "show", str(sample_person.id))
    assert "Alice Jones" in result.output
    assert "Version:   2" in result.output


def test_edit_with_stale_version(run, logged_in, sample_person):
    run("person", "edit", str(sample_person.id), "--name", "Alicia")

    result = run("person", "edit", str(sample_person.id), "--name", "Ally", "--expected-version", "1")
    assert result.exit_code == 1
    assert "modified by someone else" in result.output


def test_delete_blocked_by_accounts(run, logged_in, sample_account):
    result = run("person", "delete", str(sample_account.person_id), "--yes")

    assert result.exit_code == 1
    assert "Please delete them first" in result.output


def test_delete_confirmation(run, logged_in, sample_person):
    result = run("person", "delete", str(sample_person.id), input="n\n")
    assert "Deletion cancelled." in result.output

    result = run("person", "delete", str(sample_person.id), input="y\n")
    assert result.exit_code == 0
    assert "Deleted person 'Alice Smith'" in result.output

    result = run("person", "show", str(sample_person.id))
    assert result.exit_code == 1
    assert "not found" in result.output
