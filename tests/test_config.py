import logging
import unittest
from unittest import mock

from ecsig import Credential, MissingCredentials, Region
from ecsig.config import load_credential, load_region


class TestLoadCredential(unittest.TestCase):

    def test_from_mapping(self) -> None:
        credential = load_credential({
            'AWS_ACCESS_KEY_ID': 'AKIDEXAMPLE',
            'AWS_SECRET_ACCESS_KEY': 'secret',
        })

        self.assertEqual(credential, Credential('AKIDEXAMPLE', 'secret'))
        self.assertIsNone(credential.session_token)

    def test_session_token(self) -> None:
        credential = load_credential({
            'AWS_ACCESS_KEY_ID': 'AKIDEXAMPLE',
            'AWS_SECRET_ACCESS_KEY': 'secret',
            'AWS_SESSION_TOKEN': 'token',
        })

        self.assertEqual(credential.session_token, 'token')

    def test_missing_secret(self) -> None:
        with self.assertRaises(MissingCredentials) as ctx:
            load_credential({'AWS_ACCESS_KEY_ID': 'AKIDEXAMPLE', 'AWS_SECRET_ACCESS_KEY': '   '})
        self.assertIn('AWS_SECRET_ACCESS_KEY', str(ctx.exception))

    def test_values_are_not_altered(self) -> None:
        credential = load_credential({
            'AWS_ACCESS_KEY_ID': 'AKIDEXAMPLE',
            'AWS_SECRET_ACCESS_KEY': ' secret with edges ',
        })

        self.assertEqual(credential.secret_key, ' secret with edges ')

    def test_access_key_not_logged(self) -> None:
        env = {'AWS_ACCESS_KEY_ID': 'AKIDEXAMPLE', 'AWS_SECRET_ACCESS_KEY': 'secret'}
        with self.assertLogs('ecsig.config', level=logging.DEBUG) as logs:
            load_credential(env)

        output = '\n'.join(logs.output)
        self.assertNotIn('AKIDEXAMPLE', output)
        self.assertNotIn('secret', output)

    def test_nothing_set(self) -> None:
        with self.assertRaises(MissingCredentials) as ctx:
            load_credential({})
        self.assertIn('AWS_ACCESS_KEY_ID', str(ctx.exception))
        self.assertIn('AWS_SECRET_ACCESS_KEY', str(ctx.exception))

    def test_reads_process_environment(self) -> None:
        env = {'AWS_ACCESS_KEY_ID': 'AKIDENV', 'AWS_SECRET_ACCESS_KEY': 'env-secret'}
        with mock.patch.dict('os.environ', env, clear=True):
            self.assertEqual(load_credential(), Credential('AKIDENV', 'env-secret'))


class TestLoadRegion(unittest.TestCase):

    def test_default(self) -> None:
        self.assertEqual(load_region({}), Region.US_EAST_1)
        self.assertEqual(load_region({}, default=Region.EU_WEST_1), Region.EU_WEST_1)

    def test_aws_region_wins(self) -> None:
        env = {'AWS_REGION': 'us-west-2', 'AWS_DEFAULT_REGION': 'eu-west-1'}
        self.assertEqual(load_region(env), Region.US_WEST_2)

    def test_default_region_variable(self) -> None:
        self.assertEqual(load_region({'AWS_DEFAULT_REGION': 'ap-northeast-1'}), Region.AP_NORTHEAST_1)

    def test_unknown_region(self) -> None:
        with self.assertRaises(ValueError):
            load_region({'AWS_REGION': 'mars-north-1'})


if __name__ == '__main__':
    unittest.main(verbosity=2)
