# tests/processors/test_batch_encoder.py
"""Tests for vectorised and tabular encoding."""

import numpy as np
import pandas as pd
import pytest

from digipin.grid_systems import CoordinateOutOfRangeError, InvalidCodeSymbolError, encode
from digipin.processors import decode_frame, encode_array, encode_frame


@pytest.fixture
def points_df(sample_points):
    """Frame of the sample points with their expected codes."""
    rows = [
        {'name': name, 'latitude': lat, 'longitude': lon, 'expected': code}
        for name, ((lat, lon), code) in sample_points.items()
    ]
    return pd.DataFrame(rows)


class TestEncodeArray:
    """Test the vectorised encoder."""

    def test_known_codes(self, points_df):
        codes = encode_array(points_df['latitude'], points_df['longitude'])

        assert list(codes) == list(points_df['expected'])

    def test_matches_scalar_encoder(self):
        rng = np.random.default_rng(42)
        lats = rng.uniform(2.5, 38.5, size=500)
        lons = rng.uniform(63.5, 99.5, size=500)

        codes = encode_array(lats, lons)

        for lat, lon, code in zip(lats, lons, codes):
            assert code == encode(float(lat), float(lon))

    def test_boundary_points_match_scalar(self):
        lats = [2.5, 38.5, 20.5, 38.5, 2.5]
        lons = [63.5, 99.5, 81.5, 63.5, 99.5]

        codes = encode_array(lats, lons)

        assert list(codes) == [encode(lat, lon) for lat, lon in zip(lats, lons)]

    def test_raise_reports_first_bad_row(self):
        with pytest.raises(CoordinateOutOfRangeError) as exc_info:
            encode_array([20.0, 20.0, 50.0], [80.0, 120.0, 80.0])

        assert exc_info.value.axis == 'longitude'

    def test_coerce_returns_none(self):
        codes = encode_array([28.6139, 50.0, np.nan], [77.2090, 80.0, 80.0], errors='coerce')

        assert codes[0] == '39J-438-TJC7'
        assert codes[1] is None
        assert codes[2] is None

    def test_empty_input(self):
        assert len(encode_array([], [])) == 0

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            encode_array([20.0, 21.0], [80.0])

    def test_unknown_errors_mode(self):
        with pytest.raises(ValueError):
            encode_array([20.0], [80.0], errors='ignore')


class TestEncodeFrame:
    """Test DataFrame encoding."""

    def test_adds_code_column(self, points_df):
        result = encode_frame(points_df)

        assert (result['digipin'] == result['expected']).all()
        assert 'digipin' not in points_df.columns
        assert 'error' not in result.columns

    def test_custom_columns(self):
        df = pd.DataFrame({'lat': [12.9716], 'lng': [77.5946]})

        result = encode_frame(df, lat_col='lat', lon_col='lng', code_col='pin')

        assert result.loc[0, 'pin'] == '4P3-JK8-52C9'

    def test_numeric_strings(self):
        df = pd.DataFrame({'latitude': ['28.6139'], 'longitude': ['77.2090']})

        assert encode_frame(df).loc[0, 'digipin'] == '39J-438-TJC7'

    def test_missing_column(self):
        with pytest.raises(KeyError):
            encode_frame(pd.DataFrame({'latitude': [20.0]}))

    def test_raise_mode(self):
        df = pd.DataFrame({'latitude': [20.0, 40.0], 'longitude': [80.0, 80.0]})

        with pytest.raises(CoordinateOutOfRangeError):
            encode_frame(df)

    def test_coerce_mode(self):
        df = pd.DataFrame({
            'latitude': [28.6139, 40.0, 'not a number'],
            'longitude': [77.2090, 80.0, 80.0]
        })

        result = encode_frame(df, errors='coerce')

        assert result.loc[0, 'digipin'] == '39J-438-TJC7'
        assert result['digipin'].isna().tolist() == [False, True, True]
        assert result['error'].tolist() == [None, 'coordinate_out_of_range', 'invalid_number']
        assert result['error'].dtype == object

    def test_coerce_missing_coordinate(self):
        df = pd.DataFrame({'latitude': [None, 20.0], 'longitude': [80.0, np.nan]})

        result = encode_frame(df, errors='coerce')

        assert result['error'].tolist() == ['missing_coordinate', 'missing_coordinate']

    def test_coerce_all_valid_keeps_none(self):
        """Successful rows carry None, not NaN, whatever pandas infers for strings."""
        df = pd.DataFrame({'latitude': [12.9716], 'longitude': [77.5946]})

        result = encode_frame(df, errors='coerce')

        assert result['error'].tolist() == [None]
        assert result['digipin'].dtype == object


class TestDecodeFrame:
    """Test DataFrame decoding."""

    def test_round_trip(self, points_df):
        encoded = encode_frame(points_df)
        decoded = decode_frame(
            encoded.drop(columns=['latitude', 'longitude']),
            lat_col='center_lat', lon_col='center_lon'
        )

        assert np.allclose(decoded['center_lat'], points_df['latitude'], atol=3e-5)
        assert np.allclose(decoded['center_lon'], points_df['longitude'], atol=3e-5)

    def test_raise_on_bad_code(self):
        df = pd.DataFrame({'digipin': ['39J-438-TJC7', 'A9J-438-TJC7']})

        with pytest.raises(InvalidCodeSymbolError):
            decode_frame(df)

    def test_raise_on_missing_code(self):
        df = pd.DataFrame({'digipin': ['39J-438-TJC7', None]})

        with pytest.raises(ValueError, match="Row 1"):
            decode_frame(df)

    def test_coerce_mode(self):
        df = pd.DataFrame({'digipin': ['39J-438-TJC7', 'XYZ', 'A9J-438-TJC7', None]})

        result = decode_frame(df, errors='coerce')

        assert result.loc[0, 'latitude'] == pytest.approx(28.613901, abs=5e-7)
        assert result[['latitude', 'longitude']].iloc[1:].isna().all().all()
        assert result['error'].tolist() == [
            None, 'invalid_code_length', 'invalid_code_symbol', 'missing_code'
        ]
        assert result['error'].dtype == object
