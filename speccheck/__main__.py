import logging
import sys
from typing import NoReturn

import colorama
from tqdm import tqdm

import speccheck
from speccheck import compare, output
from speccheck.vectors import SCENARIOS, generate_test_vectors

F = "\x1B[1;34m"  # flag (light blue)
N = "\x1B[0m"     # normal color

usage = f"""\
speccheck {speccheck.__version__} - Ed25519 edge case test vectors

Generates signatures that tell apart the many ways of verifying Ed25519
(cofactored or not, canonical encodings or not, s < L or not) and writes
them to cases.json and cases.txt.

  {F}-o --json{N} FILE      JSON output (default cases.json)
  {F}-t --text{N} FILE      Text output: count, then msg=, pbk=, sig= lines
  {F}--table{N}             Print a markdown table of the generated vectors
  {F}--compare{N}           Run the vectors through the available verifiers
  {F}--debug{N}             Log each vector as it is forged, do not catch errors
  {F}-h --help -v --version{N}
"""


class Args:

  def __init__(self):
    self.json = []
    self.text = []
    self.table = None
    self.compare = None
    self.debug = None


flags = dict(
  json='-o --json'.split(),
  text='-t --text'.split(),
  table='--table'.split(),
  compare='--compare'.split(),
  debug='--debug'.split(),
)


def print_help(error: str = None) -> NoReturn:
  stream = sys.stderr if error else sys.stdout
  stream.write(usage)
  if error:
    stream.write(f"\n{error}\n")
    sys.exit(1)
  sys.exit(0)

def print_version() -> NoReturn:
  print(f"speccheck {speccheck.__version__}")
  sys.exit(0)

def argparse() -> Args:
  av = sys.argv[1:]
  if any(a.lower() in ('-h', '--help') for a in av):
    print_help()
  if any(a.lower() in ('-v', '--version') for a in av):
    print_version()

  args = Args()
  aiter = iter(av)
  for a in aiter:
    argvar = next((k for k, v in flags.items() if a in v), None)
    if argvar is None:
      print_help(f' 💣  Unknown argument: speccheck {a}')
    var = getattr(args, argvar)
    if isinstance(var, list):
      try:
        var.append(next(aiter))
      except StopIteration:
        print_help(f' 💣  Argument parameter missing: speccheck {a} …')
    else:
      setattr(args, argvar, True)

  if len(args.json) > 1 or len(args.text) > 1:
    print_help(' 💣  Only one output file of each kind may be specified')
  return args


def run(args: Args) -> None:
  scenarios = tqdm(SCENARIOS, desc="Forging", unit="scenario", leave=False, disable=not sys.stderr.isatty())
  vectors = generate_test_vectors(scenarios)

  jsonfile = args.json[0] if args.json else "cases.json"
  textfile = args.text[0] if args.text else "cases.txt"
  with open(jsonfile, "w") as f:
    f.write(output.to_json(vectors))
  with open(textfile, "w") as f:
    f.write(output.to_text(vectors))
  sys.stderr.write(f"Wrote {len(vectors)} vectors to {jsonfile} and {textfile}\n")

  if args.table:
    print(output.summary_table(vectors), end="")
  if args.compare:
    color = sys.stdout.isatty()
    print(compare.header_row(len(vectors)))
    for name, results in compare.compare(vectors).items():
      print(compare.format_row(name, results, color=color))


def main() -> NoReturn:
  """
  The main CLI entry point.

  System exit codes:
  * 0 Vectors written successfully
  * 1 CLI argument error
  * 2 Interrupted
  * 10 Error writing the output

  :raises SystemExit: on normal exit or any expected error
  :raises ForgeError: if a vector does not behave as documented (a bug), or on any error with `--debug`
  """
  colorama.init()
  args = argparse()
  logging.basicConfig(
    level=logging.DEBUG if args.debug else logging.WARNING,
    format="%(levelname)s %(name)s: %(message)s",
  )
  if args.debug:
    run(args)  # --debug makes us not catch errors
    sys.exit(0)
  try:
    run(args)
  except (ValueError, OSError) as e:
    sys.stderr.write(f"Error: {e}\n")
    sys.exit(10)
  except KeyboardInterrupt:
    sys.stderr.write("Interrupted.\n")
    sys.exit(2)
  sys.exit(0)

if __name__ == "__main__":
  main()
