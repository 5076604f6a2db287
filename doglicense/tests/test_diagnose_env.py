from doglicense.tools import diagnose_env


def test_diagnose_env_reports_storage(capsys):
    diagnose_env.main()
    output = capsys.readouterr().out
    assert "Storage:" in output
    assert "Submitted applications:" in output
    assert "/track-application" in output
