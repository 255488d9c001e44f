"""
Train a network on one of the built-in toy datasets.

Usage:
    python -m nn_gym --dataset or --epochs 10000
    python -m nn_gym --dataset scale --save weights/scale.json
    python -m nn_gym --config run.json --load weights/or.json
"""
import argparse
import logging
import os
import sys

from .config import TrainingConfig
from .data import make_batches
from .errors import NNGymError

logger = logging.getLogger("nn_gym")


# Logical OR: linearly separable, learnable by a small sigmoid net
OR_INPUTS = [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0]]
OR_TARGETS = [[0.0], [1.0], [1.0], [1.0]]

# y = 2x: exactly representable by a single identity layer
SCALE_INPUTS = [[0.0], [5.0], [0.0], [1.0]]
SCALE_TARGETS = [[0.0], [10.0], [0.0], [2.0]]

DATASETS = {
    "or": (
        OR_INPUTS,
        OR_TARGETS,
        TrainingConfig(),
    ),
    "scale": (
        SCALE_INPUTS,
        SCALE_TARGETS,
        TrainingConfig(
            layers=((1, "identity"), (1, "identity")),
            learning_rate=0.01,
            epochs=1000,
            batch_size=1,
        ),
    ),
}


def configure_logging(level=None):
    """
    Set up logging for command line runs.
    Falls back to the LOG_LEVEL environment variable, then INFO.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="nn-gym",
        description="Train a small dense network on a toy dataset.",
    )
    parser.add_argument("--dataset", choices=sorted(DATASETS), default="or")
    parser.add_argument("--config", help="JSON file with TrainingConfig fields")
    parser.add_argument("--epochs", type=int)
    parser.add_argument("--learning-rate", type=float)
    parser.add_argument("--batch-size", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--load", metavar="PATH", help="start from saved weights")
    parser.add_argument("--save", metavar="PATH", help="write trained weights")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return parser


def resolve_config(args):
    """Dataset defaults, then the config file, then explicit flags."""
    _, _, config = DATASETS[args.dataset]
    if args.config:
        config = TrainingConfig.from_json(args.config)

    overrides = {
        "epochs": args.epochs,
        "learning_rate": args.learning_rate,
        "batch_size": args.batch_size,
        "seed": args.seed,
        "log_level": args.log_level,
    }
    return config.with_(**{k: v for k, v in overrides.items() if v is not None})


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(config.log_level)
    inputs, targets, _ = DATASETS[args.dataset]

    try:
        network = config.build_network()
        if args.load:
            network.load(args.load)

        input_batches, target_batches = make_batches(inputs, targets, config.batch_size)
        logger.info(f"Training {network} for {config.epochs} epochs on '{args.dataset}'")
        network.train(input_batches, target_batches, config.epochs)

        predictions = network.predict(inputs)
        for sample, prediction in zip(inputs, predictions.tolist()):
            logger.info(f"{sample} = {prediction}")

        if args.save:
            network.save(args.save)
    except NNGymError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
