import pytest

from procsim.models import ProcessDescriptor
from procsim.workload import (ProcessNamer, ProcessValidationError, input_interactive, make_process,
                              parse_csv, sample_processes, validate_processes)


def test_sample_processes():
    procs = sample_processes()
    assert [(p.name, p.arrival, p.burst) for p in procs] == [
        ('P1', 0, 5), ('P2', 1, 3), ('P3', 2, 8), ('P4', 3, 6), ('P5', 4, 2),
    ]
    assert validate_processes(procs) is procs


@pytest.mark.parametrize('procs', [
    [],
    [ProcessDescriptor('', 0, 1)],
    [ProcessDescriptor('A', 0, 1), ProcessDescriptor('A', 1, 1)],
    [ProcessDescriptor('A', -1, 1)],
    [ProcessDescriptor('A', 0, 0)],
    [ProcessDescriptor('A', 0, 1.5)],
    [ProcessDescriptor('A', '0', 1)],
])
def test_validate_rejects(procs):
    with pytest.raises(ProcessValidationError):
        validate_processes(procs)


def test_validation_error_is_a_value_error():
    assert issubclass(ProcessValidationError, ValueError)


def test_namer_counts_every_added_process():
    namer = ProcessNamer()
    assert make_process('', '', '4', namer) == ProcessDescriptor('P1', 0, 4)
    assert make_process('Editor', '2', '3', namer).name == 'Editor'
    assert make_process(' ', '1', '1', namer).name == 'P3'
    namer.reset()
    assert namer.peek() == 'P1'


def test_failed_entry_does_not_consume_a_name():
    namer = ProcessNamer()
    with pytest.raises(ProcessValidationError):
        make_process('', '0', '', namer)
    assert namer.peek() == 'P1'


@pytest.mark.parametrize('arrival, burst', [('x', '1'), ('0', '1.5'), ('-2', '3'), ('0', '0')])
def test_make_process_rejects(arrival, burst):
    with pytest.raises(ProcessValidationError):
        make_process('A', arrival, burst)


def test_parse_csv_named_rows_with_header(tmp_path):
    path = tmp_path / 'procs.csv'
    path.write_text("name,arrival,burst\nA,0,5\n\n# comment\nB, 2, 3\n")
    assert parse_csv(str(path)) == [ProcessDescriptor('A', 0, 5), ProcessDescriptor('B', 2, 3)]


def test_parse_csv_unnamed_rows(tmp_path):
    path = tmp_path / 'procs.csv'
    path.write_text("0,3\n1,4\n")
    assert [p.name for p in parse_csv(str(path))] == ['P1', 'P2']


def test_parse_csv_reports_line_number(tmp_path):
    path = tmp_path / 'procs.csv'
    path.write_text("A,0,5\nB,1,0\n")
    with pytest.raises(ProcessValidationError, match='Line 2'):
        parse_csv(str(path))


def test_parse_csv_rejects_duplicates(tmp_path):
    path = tmp_path / 'procs.csv'
    path.write_text("A,0,5\nA,1,2\n")
    with pytest.raises(ProcessValidationError, match='Duplicate'):
        parse_csv(str(path))


def test_parse_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_csv(str(tmp_path / 'missing.csv'))


def test_input_interactive_retries_bad_rows(capsys):
    answers = iter(['zero', '2', '', '', '5', 'B', '1', 'x', 'B', '1', '2'])
    procs = input_interactive(prompt=lambda _: next(answers))
    assert procs == [ProcessDescriptor('P1', 0, 5), ProcessDescriptor('B', 1, 2)]
    out = capsys.readouterr().out
    assert 'valid integer' in out
    assert 'must be integers' in out


@pytest.mark.parametrize('text', ["A,0,2.5\nB,1,3\n", "A,0,five\nB,1,3\n", "0,x\n1,3\n"])
def test_parse_csv_bad_first_row_is_not_a_header(tmp_path, text):
    path = tmp_path / 'procs.csv'
    path.write_text(text)
    with pytest.raises(ProcessValidationError, match='Line 1'):
        parse_csv(str(path))


def test_parse_csv_unnamed_header(tmp_path):
    path = tmp_path / 'procs.csv'
    path.write_text("arrival,burst\n0,3\n")
    assert parse_csv(str(path)) == [ProcessDescriptor('P1', 0, 3)]
