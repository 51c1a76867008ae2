# /convert.py

import sys
import logging
import argparse
from pathlib import Path

from tqdm import tqdm

from template_canvas.configs.base_config import Config, load_config
from template_canvas.codec.errors import TemplateFormatError
from template_canvas.codec.template_codec import load_template, encode, dumps
from template_canvas.core.relations import compute_relations


def setup_logging(verbose: bool = False):
    """Configures logging for the script."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

def print_relations(items):
    """Prints one row per item with the kind of its nearest neighbor in each direction."""
    by_id = {item.id: item for item in items}

    def name(item_id):
        return by_id[item_id].kind.value if item_id else "-"

    print(f"{'#':>3}  {'kind':<7} {'above':<7} {'below':<7} {'left':<7} {'right':<7}")
    for i, (item, rel) in enumerate(zip(items, compute_relations(items)), start=1):
        print(f"{i:>3}  {item.kind.value:<7} {name(rel.above):<7} {name(rel.below):<7} "
              f"{name(rel.left):<7} {name(rel.right):<7}")

def convert_file(path: Path, output_dir: Path, config: Config, show_relations: bool = False) -> Path:
    """Reads a template of either schema and writes it back out in the backend schema."""
    items = load_template(path, config.canvas)
    if not items:
        raise TemplateFormatError(f"{path} contains no usable elements.")
    if show_relations:
        print(f"\n{path.name}")
        print_relations(items)

    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{path.stem}_{config.export.filename}"
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(dumps(encode(items), config.export))
    return output_path

def main(argv=None) -> int:
    """
    Converts template files (editor or backend schema) into backend-schema files.
    Files that fail to load are logged and skipped.
    """
    parser = argparse.ArgumentParser(
        description="Convert layout templates into the backend template schema."
    )
    parser.add_argument('inputs', nargs='+', type=Path, help='Template JSON files to convert.')
    parser.add_argument(
        '--output-dir',
        type=Path,
        default=Path('converted'),
        help='Directory for the converted files.'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to a YAML configuration file (defaults are used when omitted).'
    )
    parser.add_argument('--show-relations', action='store_true', help='Print the neighbor table per file.')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging.')
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        config = load_config(args.config) if args.config else Config()
    except Exception as e:
        logging.error(f"Error loading configuration: {e}")
        return 2

    errors = []
    for path in tqdm(args.inputs, desc="Converting templates", disable=len(args.inputs) < 2):
        try:
            output_path = convert_file(path, args.output_dir, config, args.show_relations)
            logging.info(f"{path} -> {output_path}")
        except (OSError, TemplateFormatError) as e:
            logging.error(f"Failed to convert {path}: {e}")
            errors.append(path)

    if errors:
        logging.error(f"{len(errors)} of {len(args.inputs)} file(s) failed.")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
