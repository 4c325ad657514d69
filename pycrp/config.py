# Copyright (c) 2014, Salesforce.com, Inc.  All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
# - Redistributions of source code must retain the above copyright
#   notice, this list of conditions and the following disclaimer.
# - Redistributions in binary form must reproduce the above copyright
#   notice, this list of conditions and the following disclaimer in the
#   documentation and/or other materials provided with the distribution.
# - Neither the name of Salesforce.com nor the names of its contributors
#   may be used to endorse or promote products derived from this
#   software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED.  IN NO EVENT SHALL THE
# COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS
# OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND
# ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR
# TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE
# USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

from copy import deepcopy
import simplejson as json
from pycrp.util import parsable

DEFAULTS = {
    'seed': 0,
    'restaurant': {
        'discount': 0.8,
        'strength': 1.0,
    },
    'prior': {
        'discount': {
            'alpha': 1.0,
            'beta': 1.0,
        },
        'strength': {
            'shape': 1.0,
            'rate': 1.0,
        },
    },
    'hyper': {
        'outer_loops': 5,
        'inner_steps': 10,
    },
}


def fill_in_defaults(config, defaults=DEFAULTS):
    '''
    Recursively fill in missing keys. A key explicitly set to None is kept,
    so that e.g. {'prior': {'discount': None}} disables the discount prior.
    '''
    assert isinstance(config, dict), config
    assert isinstance(defaults, dict), defaults
    for key, default in defaults.items():
        if key not in config:
            config[key] = deepcopy(default)
        elif isinstance(default, dict) and config[key] is not None:
            fill_in_defaults(config[key], default)


def config_dump(config, filename):
    config = deepcopy(config)
    fill_in_defaults(config)
    with open(filename, 'w') as f:
        json.dump(config, f, indent=4, sort_keys=True)


def config_load(filename):
    with open(filename) as f:
        config = json.load(f)
    fill_in_defaults(config)
    return config


@parsable.command
def defaults():
    '''
    Print the default config as json.
    '''
    print(json.dumps(DEFAULTS, indent=4, sort_keys=True))
