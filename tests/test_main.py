#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the command-line front end.
"""

import os

import numpy as np
import pandas as pd
import yaml

import main


def write_csv(path, blob_frame):
    xyz = blob_frame.returns['xyz']
    df = pd.DataFrame({
        'frame': 3,
        'timestamp': 1.5,
        'x': xyz[:, 0],
        'y': xyz[:, 1],
        'z': xyz[:, 2],
        'vx': blob_frame.returns['vel'][:, 0],
        'vy': blob_frame.returns['vel'][:, 1],
        'vz': blob_frame.returns['vel'][:, 2],
        'intensity': blob_frame.returns['intensity'],
    })
    df.to_csv(path, index=False)


def test_load_config_defaults():
    config = main.load_config(None)

    assert config['clustering']['epsilon'] == 1.0
    assert config['clustering']['min_points'] == 5
    assert config['clustering']['expand_border_points'] is False
    assert config['paths']['reports_dir'] is None


def test_load_config_merges_file(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text(yaml.safe_dump({'clustering': {'epsilon': 0.5}, 'extra': {'a': 1}}))

    config = main.load_config(str(path))

    assert config['clustering']['epsilon'] == 0.5
    assert config['clustering']['min_points'] == 5
    assert config['extra'] == {'a': 1}


def test_load_config_missing_file_uses_defaults(tmp_path):
    config = main.load_config(str(tmp_path / 'missing.yaml'))

    assert config['clustering']['epsilon'] == 1.0


def test_load_frames_from_csv(tmp_path, blob_frame):
    path = str(tmp_path / 'frames.csv')
    write_csv(path, blob_frame)

    frames = main.load_frames(path)

    assert len(frames) == 1
    assert frames[0].launched_count == 3
    assert frames[0].timestamp == 1.5
    assert len(frames[0]) == len(blob_frame)


def test_load_frames_from_npz(tmp_path, blob_frame):
    path = str(tmp_path / 'frame.npz')
    np.savez(path, returns=blob_frame.returns, timestamp=2.0, launched_count=11)

    frames = main.load_frames(path)

    assert frames[0].launched_count == 11
    np.testing.assert_array_equal(frames[0].returns, blob_frame.returns)


def test_main_writes_report_and_plot(tmp_path, blob_frame):
    input_path = str(tmp_path / 'frames.csv')
    write_csv(input_path, blob_frame)
    report_dir = str(tmp_path / 'reports')
    plot_path = str(tmp_path / 'last.png')

    exit_code = main.main([input_path, '--output-dir', report_dir, '--plot', plot_path])

    assert exit_code == 0
    reports = sorted(os.listdir(report_dir))
    assert len(reports) == 2
    clusters = pd.read_csv(os.path.join(report_dir, [r for r in reports if r.endswith('_clusters.csv')][0]))
    assert clusters['num_points'].tolist() == [40, 40]
    assert os.path.exists(plot_path)


def test_main_rejects_bad_configuration(tmp_path, blob_frame):
    input_path = str(tmp_path / 'frames.csv')
    write_csv(input_path, blob_frame)

    assert main.main([input_path, '--epsilon', '0']) == 1


def test_main_rejects_unknown_format(tmp_path):
    path = tmp_path / 'frames.txt'
    path.write_text('nothing')

    assert main.main([str(path)]) == 1


def write_border_csv(path):
    pd.DataFrame({
        'x': [1.05, 0.0, 0.1, 0.0, 0.0, 0.1],
        'y': [0.0, 0.0, 0.0, 0.1, 0.0, 0.1],
        'z': [0.0, 0.0, 0.0, 0.0, 0.1, 0.0],
        'intensity': 1.0,
    }).to_csv(path, index=False)


def read_cluster_report(report_dir):
    name = [r for r in os.listdir(report_dir) if r.endswith('_clusters.csv')][0]
    return pd.read_csv(os.path.join(report_dir, name))


def test_main_canonical_flag_adds_border_returns(tmp_path):
    input_path = str(tmp_path / 'border.csv')
    write_border_csv(input_path)
    default_dir = str(tmp_path / 'default')
    canonical_dir = str(tmp_path / 'canonical')

    assert main.main([input_path, '--output-dir', default_dir]) == 0
    assert main.main([input_path, '--output-dir', canonical_dir, '--canonical']) == 0

    assert read_cluster_report(default_dir)['num_points'].tolist() == [5]
    assert read_cluster_report(canonical_dir)['num_points'].tolist() == [6]


def test_main_writes_report_to_configured_reports_dir(tmp_path, blob_frame):
    input_path = str(tmp_path / 'frames.csv')
    write_csv(input_path, blob_frame)
    report_dir = tmp_path / 'rep'
    config_path = tmp_path / 'config.yaml'
    config_path.write_text(yaml.safe_dump({'paths': {'reports_dir': str(report_dir)}}))

    assert main.main([input_path, '--config', str(config_path)]) == 0

    assert read_cluster_report(str(report_dir))['num_points'].tolist() == [40, 40]


def test_main_output_dir_overrides_reports_dir(tmp_path, blob_frame):
    input_path = str(tmp_path / 'frames.csv')
    write_csv(input_path, blob_frame)
    config_path = tmp_path / 'config.yaml'
    config_path.write_text(yaml.safe_dump({'paths': {'reports_dir': str(tmp_path / 'rep')}}))
    output_dir = tmp_path / 'cli'

    assert main.main([input_path, '--config', str(config_path), '--output-dir', str(output_dir)]) == 0

    assert output_dir.is_dir()
    assert not (tmp_path / 'rep').exists()


def test_main_rejects_non_numeric_config_value(tmp_path, blob_frame):
    input_path = str(tmp_path / 'frames.csv')
    write_csv(input_path, blob_frame)
    config_path = tmp_path / 'config.yaml'
    config_path.write_text(yaml.safe_dump({'clustering': {'epsilon': 'abc'}}))

    assert main.main([input_path, '--config', str(config_path)]) == 1
