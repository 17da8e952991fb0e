import json
from typing import Sequence

from .vectors import CELLS, TestVector


def to_json(vectors: Sequence[TestVector]) -> str:
  """JSON list of hex encoded message, pub_key and signature"""
  return json.dumps([tv.to_dict() for tv in vectors])


def to_text(vectors: Sequence[TestVector]) -> str:
  """Count followed by msg=, pbk=, sig= lines per vector (easy to parse from C)"""
  lines = [str(len(vectors))]
  for tv in vectors:
    lines += [f"msg={tv.message.hex()}", f"pbk={tv.pub_key.hex()}", f"sig={tv.signature.hex()}"]
  return "\n".join(lines)


def mark(accepted: bool) -> str:
  return "V" if accepted else "X"


def summary_table(vectors: Sequence[TestVector]) -> str:
  """Markdown table of the vectors with their documented classification"""
  rows = [
    "|  |    msg |    sig |  S   |    A   |    R   | cof-ed | cof-less |        comment        |",
    "|---------------------------------------------------------------------------------------|",
  ]
  for i, (tv, cell) in enumerate(zip(vectors, CELLS)):
    cof = mark(cell.cofactored) + ("*" if cell.pre_reduced is False else "")
    rows.append(
      f"|{i:2}| ..{tv.message.hex()[-4:]} | ..{tv.signature.hex()[-4:]} | {cell.s:>4} "
      f"| {cell.a:^6} | {cell.r:^6} | {cof:^6} | {mark(cell.cofactorless):^8} | {cell.comment} |"
    )
  return "\n".join(rows) + "\n"
