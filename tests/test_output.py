import json

from speccheck import output
from speccheck.vectors import CELLS


def test_json(vectors):
  data = json.loads(output.to_json(vectors))
  assert len(data) == 12
  for d, tv in zip(data, vectors):
    assert d == dict(message=tv.message.hex(), pub_key=tv.pub_key.hex(), signature=tv.signature.hex())


def test_text(vectors):
  text = output.to_text(vectors)
  lines = text.split("\n")
  assert lines[0] == "12"
  assert len(lines) == 1 + 3 * 12
  assert not text.endswith("\n")
  for i, tv in enumerate(vectors):
    msg, pbk, sig = lines[1 + 3 * i:4 + 3 * i]
    assert msg == f"msg={tv.message.hex()}"
    assert pbk == f"pbk={tv.pub_key.hex()}"
    assert sig == f"sig={tv.signature.hex()}"
  assert output.to_text([]) == "0"


def test_summary_table(vectors):
  table = output.summary_table(vectors)
  assert table.endswith("\n")
  rows = table.split("\n")[:-1]
  assert len(rows) == 2 + len(CELLS)
  assert rows[0].startswith("|  |    msg |")
  for i, row in enumerate(rows[2:]):
    assert row.startswith(f"|{i:2}| ..{vectors[i].message.hex()[-4:]} |")
    assert row.count("|") == 10
  # Only the pre-reduced case carries the footnote mark
  assert [i for i, row in enumerate(rows[2:]) if "V*" in row] == [5]
  assert "non-canonical A, not reduced for hash" in rows[-1]
  assert output.mark(True) == "V"
  assert output.mark(False) == "X"


def test_summary_table_numbering(vectors):
  # Rows are numbered by position, vectors need not carry a scenario id
  unnumbered = [tv._replace(scenario=None) for tv in vectors]
  assert output.summary_table(unnumbered) == output.summary_table(vectors)
  rows = output.summary_table(unnumbered[5:6]).split("\n")
  assert rows[2].startswith("| 0| ..")
