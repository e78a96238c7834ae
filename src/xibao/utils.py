import inspect
import json
import logging
import shutil
from pathlib import Path


def load_jsonl(jsonl_path, logger=None):
    jsonl_path = Path(jsonl_path)
    if not jsonl_path.exists():
        raise FileNotFoundError(f"Path not found: {jsonl_path}")

    records = []
    with open(jsonl_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            # NOTE: blank lines are allowed between records
            if not line:
                continue
            records.append(json.loads(line))

    if logger is not None:
        logger.info(f"Loaded {len(records)} records from {jsonl_path}.")
    return records


def setup_logger(output_dir, name=None, level=logging.INFO):
    """Setup logger to write to both stdout and a log file

    Args:
        output_dir: Directory where logs will be stored
        name: Logger name (defaults to caller's __name__)
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    frame = inspect.currentframe()
    error_cnt = 3
    while inspect.getfile(frame) == __file__:
        frame = frame.f_back
        error_cnt -= 1
        if error_cnt == 0:
            raise RuntimeError("Could not find caller's __name__")

    if name is None:
        name = frame.f_globals.get("__name__", __name__)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    script_file_name = Path(inspect.getfile(frame)).stem
    log_dir = output_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{script_file_name}.log"
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # library modules log through the "xibao" hierarchy
    package_logger = logging.getLogger("xibao")
    package_logger.setLevel(level)
    package_logger.handlers.clear()
    package_logger.addHandler(console_handler)
    package_logger.addHandler(file_handler)

    logger.info(f"Setup up logger to: {log_file}")
    return logger


def check_dir_non_empty(output_dir, logger=None):
    output_dir = Path(output_dir)

    if output_dir.exists():
        for i in output_dir.glob("*"):
            # ignore the logs folder
            if i.name == "logs":
                continue
            if logger is not None:
                logger.info(f"Output dir {output_dir} already has images.")
            return True

    output_dir.mkdir(parents=True, exist_ok=True)
    return False


def prepare_output_dir_and_logger(*, output_dir, overwrite, logger_name=None):
    should_skip = False

    output_dir = Path(output_dir)
    logger = setup_logger(output_dir, name=logger_name)

    if check_dir_non_empty(output_dir):
        if overwrite:
            shutil.rmtree(output_dir)
            # recreate output dir and its logger
            logger = setup_logger(output_dir, name=logger_name)
            logger.warning(
                f"Output dir {output_dir} is not empty. Overwriting with `--overwrite`."
            )
        else:
            logger.warning(f"Output dir {output_dir} is not empty. Skipping.")
            should_skip = True

    return should_skip, logger
