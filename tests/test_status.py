import pytest

from zeitgeist.status import DBError, ErrorCode


def test_error_keeps_code_and_message():
    err = DBError(ErrorCode.CREATE_ERROR, "The Database Already Exists")
    assert err.code is ErrorCode.CREATE_ERROR
    assert err.message == "The Database Already Exists"
    assert str(err) == "The Database Already Exists"


def _drop_missing():
    raise DBError(ErrorCode.DROP_ERROR, "The Database Is not Exist")


def test_error_can_be_raised_and_caught():
    err = DBError(ErrorCode.DROP_ERROR, "The Database Is not Exist")
    assert isinstance(err, Exception)
    assert err.code is ErrorCode.DROP_ERROR
    with pytest.raises(DBError) as info:
        _drop_missing()
    assert info.value.code is ErrorCode.DROP_ERROR
    assert str(info.value) == "The Database Is not Exist"


def test_error_rejects_ok_code():
    with pytest.raises(ValueError):
        DBError(ErrorCode.OK, "OK")


def test_error_rejects_non_enum_code():
    with pytest.raises(TypeError):
        DBError(3, "bad")


def test_every_error_code_round_trips():
    codes = [code for code in ErrorCode if code is not ErrorCode.OK]
    assert len(codes) == 4
    errors = [DBError(code, code.name) for code in codes]
    assert [err.code for err in errors] == codes
    assert [err.message for err in errors] == [code.name for code in codes]


def test_repr_names_code():
    err = DBError(ErrorCode.SYNTAX_ERROR, "Your sql have syntax error")
    assert "SYNTAX_ERROR" in repr(err)
    assert "Your sql have syntax error" in repr(err)