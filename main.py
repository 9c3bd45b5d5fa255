#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Main entry point for the radar frame processor.

This module provides a command-line front end that loads recorded radar
frames, clusters each of them into objects, and optionally saves a CSV
report and a plot of the last frame.
"""

import sys
import os
import argparse
import logging

import numpy as np
import pandas as pd
import yaml

from radar_processor import RadarFrameProcessor, ClusteringParams, RadarFrame, RadarProcessingError
from radar_processor.radar_params import RADAR_RETURN_DTYPE, returns_from_arrays

logger = logging.getLogger('radar_processor')

CSV_REQUIRED_COLUMNS = ['x', 'y', 'z', 'intensity']


def parse_args(argv=None):
    """
    Parse command-line arguments.

    Args:
        argv: Argument list. Defaults to sys.argv[1:].

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description='Radar Frame Processor',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        'input',
        help='Recorded frames (.npz or .csv)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration YAML file'
    )

    parser.add_argument(
        '--epsilon',
        type=float,
        default=None,
        help='Neighborhood radius in meters (overrides config)'
    )

    parser.add_argument(
        '--min-points',
        type=int,
        default=None,
        help='Minimum neighborhood size of a core point (overrides config)'
    )

    parser.add_argument(
        '--intensity-threshold',
        type=float,
        default=None,
        help='Returns at or below this intensity are discarded (overrides config)'
    )

    parser.add_argument(
        '--canonical',
        action='store_true',
        help='Let border points reached from a core point join its cluster'
    )

    parser.add_argument(
        '--output-dir',
        type=str,
        default=None,
        help='Directory for the CSV cluster report (overrides paths.reports_dir)'
    )

    parser.add_argument(
        '--plot',
        type=str,
        default=None,
        help='Save a PNG plot of the last frame to this path'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser.parse_args(argv)


def load_config(config_path):
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Dictionary of configuration values.
    """
    # Default configuration
    config = {
        'clustering': {
            'epsilon': 1.0,
            'min_points': 5,
            'intensity_threshold': 0.0,
            'expand_border_points': False,
            'leafsize': 16,
            'profile': False
        },
        'paths': {
            'reports_dir': None
        }
    }

    if not config_path:
        return config

    if not os.path.exists(config_path):
        logger.warning(f"Configuration file {config_path} not found, using defaults")
        return config

    with open(config_path, 'r') as f:
        file_config = yaml.safe_load(f) or {}

    # Update default configuration with file values
    for section, values in file_config.items():
        if section in config and isinstance(values, dict):
            config[section].update(values)
        else:
            config[section] = values

    logger.info(f"Loaded configuration from {config_path}")
    return config


def load_frames(input_path):
    """
    Load recorded radar frames from disk.

    A .npz file holds one frame, either as a ``returns`` record array or as
    ``xyz``, ``vel`` and ``intensity`` arrays, plus optional ``timestamp``
    and ``launched_count`` scalars. A .csv file holds one row per return
    with columns x, y, z, intensity and optionally vx, vy, vz, frame and
    timestamp.

    Args:
        input_path: Path to the recording.

    Returns:
        List of RadarFrame objects.
    """
    ext = os.path.splitext(input_path)[1].lower()

    if ext == '.npz':
        with np.load(input_path) as data:
            if 'returns' in data:
                records = data['returns']
                if records.dtype == RADAR_RETURN_DTYPE:
                    returns = records.copy()
                else:
                    returns = returns_from_arrays(records['xyz'], records['vel'], records['intensity'])
            else:
                returns = returns_from_arrays(
                    data['xyz'],
                    data['vel'] if 'vel' in data else None,
                    data['intensity'] if 'intensity' in data else None
                )
            timestamp = float(data['timestamp']) if 'timestamp' in data else 0.0
            launched_count = int(data['launched_count']) if 'launched_count' in data else 0
        return [RadarFrame(returns=returns, timestamp=timestamp, launched_count=launched_count)]

    if ext == '.csv':
        df = pd.read_csv(input_path)
        missing = [c for c in CSV_REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"CSV file is missing columns: {', '.join(missing)}")
        for column in ('vx', 'vy', 'vz'):
            if column not in df.columns:
                df[column] = 0.0
        if 'frame' not in df.columns:
            df['frame'] = 0

        frames = []
        for frame_id, group in df.groupby('frame', sort=True):
            returns = returns_from_arrays(
                group[['x', 'y', 'z']].to_numpy(),
                group[['vx', 'vy', 'vz']].to_numpy(),
                group['intensity'].to_numpy()
            )
            timestamp = float(group['timestamp'].iloc[0]) if 'timestamp' in group.columns else 0.0
            frames.append(RadarFrame(returns=returns, timestamp=timestamp, launched_count=int(frame_id)))
        return frames

    raise ValueError(f"Unsupported input format: {input_path}")


def main(argv=None):
    """
    Main entry point for the application.

    Returns:
        Application exit code.
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    if args.verbose:
        logger.setLevel(logging.DEBUG)
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)

        # Override config with command-line arguments
        if args.epsilon is not None:
            config['clustering']['epsilon'] = args.epsilon
        if args.min_points is not None:
            config['clustering']['min_points'] = args.min_points
        if args.intensity_threshold is not None:
            config['clustering']['intensity_threshold'] = args.intensity_threshold
        if args.canonical:
            config['clustering']['expand_border_points'] = True

        processor = RadarFrameProcessor(ClusteringParams.from_dict(config['clustering']), logger=logger)

        frames = load_frames(args.input)
        logger.info(f"Loaded {len(frames)} frames from {args.input}")

        processed = []
        for frame in processor.process_frames(frames):
            logger.info(
                f"Frame {frame.launched_count}: {frame.valid_returns} valid returns, "
                f"{frame.invalid_returns} invalid, {frame.num_clusters} clusters"
            )
            processed.append(frame)

        output_dir = args.output_dir or (config.get('paths') or {}).get('reports_dir')
        if output_dir:
            from radar_processor.utils.report_generator import save_cluster_report
            paths = save_cluster_report(processed, output_dir)
            logger.info(f"Cluster report written to {paths['clusters']}")

        if args.plot and processed:
            from radar_processor.visualization.visualizer import save_cluster_visualization
            save_cluster_visualization(processed[-1], args.plot)
            logger.info(f"Saved visualization to {args.plot}")

        return 0

    except (RadarProcessingError, ValueError, OSError, KeyError) as e:
        logger.error(f"Processing failed: {str(e)}")
        return 1
    except KeyboardInterrupt:
        logger.info("Processing interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
