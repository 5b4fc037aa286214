import main


def test_single_expression(capsys):
    assert main.main(["2+3"]) == 0
    assert capsys.readouterr().out.strip() == "2+3 = 5"


def test_fractional_result(capsys):
    main.main(["10/4"])
    assert capsys.readouterr().out.strip() == "10/4 = 2.5"


def test_one_failing_expression_fails_the_run(capsys):
    assert main.main(["2+3", "(2"]) == 1
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "2+3 = 5"
    assert lines[1].startswith("(2: ERROR! (3002:")


def test_required_files_are_present():
    main.check_files_exist()
