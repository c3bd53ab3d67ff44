from teamhub.access.gate import check_action
from teamhub.access.identity import Identity
from teamhub.access.permissions import Action, Resource, Role, build_matrix


def _identity(role):
    return Identity(id="64b000000000000000000001", role=role)


def test_missing_identity_is_denied():
    assert check_action(None, Resource.TESTING, {Action.READ}) is False


def test_admin_may_do_everything():
    admin = _identity("admin")
    for resource in Resource:
        assert check_action(admin, resource, set(Action))


def test_every_required_action_must_be_permitted():
    trainer = _identity("trainer")
    assert check_action(trainer, Resource.ATHLETE, {Action.READ, Action.EDIT})
    assert not check_action(trainer, Resource.ATHLETE, {Action.READ, Action.DELETE})


def test_trainer_cannot_delete_trainers():
    assert not check_action(_identity("trainer"), Resource.TRAINER, {Action.DELETE})


def test_athlete_reads_testings_only():
    athlete = _identity("athlete")
    assert check_action(athlete, Resource.TESTING, {Action.READ_ALL})
    assert not check_action(athlete, Resource.TESTING, {Action.CREATE})
    assert not check_action(athlete, Resource.ATHLETE, {Action.READ})


def test_unknown_role_is_denied():
    assert not check_action(_identity("guest"), Resource.TEAM, {Action.READ})


def test_substitute_matrix():
    table = {role: {r: () for r in Resource} for role in Role}
    table[Role.ATHLETE][Resource.TEAM] = (Action.READ,)
    matrix = build_matrix(table)

    assert check_action(_identity("athlete"), Resource.TEAM, {Action.READ}, matrix)
    assert not check_action(_identity("admin"), Resource.TEAM, {Action.READ}, matrix)
