from src.hrms.hrms.users.service import UserService


def test_directory_lists_active_users_without_private_fields(users_repo):
    entries = UserService(users_repo).list_directory()

    assert [e["first_name"] for e in entries] == ["Asha", "Priya", "Rahul", "Vikram"]
    assert all("is_active" not in e and "manager_id" not in e for e in entries)


def test_directory_filters_by_department(users_repo):
    entries = UserService(users_repo).list_directory(department=" Engineering ")

    assert {e["id"] for e in entries} == {2, 3}


def test_blank_department_means_everyone(users_repo):
    assert len(UserService(users_repo).list_directory(department="  ")) == 4
