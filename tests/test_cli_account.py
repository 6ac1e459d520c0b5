"""Tests for the account CLI commands."""


def test_create_and_list(run, logged_in, sample_person):
    result = run("account", "create", str(sample_person.id), "1002003004")
    assert result.exit_code == 0
    assert "Created account '1002003004' (ID: 1)" in result.output

    result = run("account", "list", str(sample_person.id))
    assert result.exit_code == 0
    assert "1002003004" in result.output
    assert "Balance: 0.00" in result.output


def test_create_for_unknown_person(run, logged_in):
    result = run("account", "create", "99", "1002003004")

    assert result.exit_code == 1
    assert "Invalid person selected" in result.output


def test_create_duplicate_number(run, logged_in, sample_account):
    result = run("account", "create", str(sample_account.person_id), sample_account.account_number)

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_show_by_number_or_id(run, logged_in, sample_account, post):
    post(sample_account.id, "100", description="Deposit")

    by_number = run("account", "show", sample_account.account_number)
    by_id = run("account", "show", str(sample_account.id))

    for result in (by_number, by_id):
        assert result.exit_code == 0
        assert "Owner:   Alice Smith" in result.output
        assert "Balance: 100.00" in result.output
        assert "Deposit" in result.output


def test_show_unknown_account(run, logged_in):
    result = run("account", "show", "nope")

    assert result.exit_code == 1
    assert "Account 'nope' not found" in result.output


def test_close_and_reopen(run, logged_in, sample_account):
    result = run("account", "edit", sample_account.account_number, "--closed")
    assert result.exit_code == 0
    assert "Status:  closed" in run("account", "show", str(sample_account.id)).output

    run("account", "edit", str(sample_account.id), "--open")
    assert "Status:  open" in run("account", "show", str(sample_account.id)).output


def test_rename(run, logged_in, sample_account):
    result = run("account", "edit", str(sample_account.id), "--account-number", "NEW-1")
    assert result.exit_code == 0
    assert "NEW-1" in run("account", "show", "NEW-1").output


def test_recalculate(run, logged_in, sample_account, post):
    post(sample_account.id, "100")
    post(sample_account.id, "-40")

    result = run("account", "recalculate", sample_account.account_number)
    assert result.exit_code == 0
    assert "60.00" in result.output


def test_delete_cascades(run, logged_in, sample_account, post):
    post(sample_account.id, "100")
    post(sample_account.id, "-40")

    result = run("account", "delete", sample_account.account_number, "--yes")
    assert result.exit_code == 0
    assert "Deleted account '1002003004' and 2 transactions" in result.output

    assert run("account", "show", str(sample_account.id)).exit_code == 1


def test_delete_cancelled(run, logged_in, sample_account):
    result = run("account", "delete", str(sample_account.id), input="n\n")

    assert "Deletion cancelled." in result.output
    assert run("account", "show", str(sample_account.id)).exit_code == 0
