import configparser
import os

from loguru import logger

from graphneat.activations import activations, aggregations

class Config:
    """
    Flat set of named constants steering genome construction, mutation and distance.

    'Config()' yields the default values. 'Config(path)' reads an INI file; every
    key is optional and falls back to its default. The values are plain attributes
    and are not meant to change once evolution has started.
    """

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or with default values only.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, all parameters keep their default values.

        Raises:
            FileNotFoundError: If 'config_file' does not exist
            ValueError:        If a parameter is out of its admissible range
        """

        # [GENOME]
        self.num_inputs  = 4
        self.num_outputs = 1
        self.max_node_id = 2**31 - 1

        # [NODE]
        self.bias_init_mean        = 1.0
        self.bias_init_stdev       = 0.0
        self.response_init_mean    = 1.0
        self.response_init_stdev   = 0.0
        self.activation_default    = "sigmoid"
        self.aggregation_default   = "sum"
        self.bias_mutate_rate      = 0.7
        self.bias_replace_rate     = 0.1
        self.bias_mutate_power     = 0.5
        self.bias_min_value        = -30.0
        self.bias_max_value        = 30.0
        self.response_mutate_rate  = 0.1
        self.response_replace_rate = 0.1
        self.response_mutate_power = 0.1
        self.response_min_value    = -30.0
        self.response_max_value    = 30.0
        self.activation_mut_prob   = 0.2
        self.aggregation_mut_prob  = 0.2

        # [CONNECTION]
        self.weight_mutate_rate  = 0.8
        self.weight_replace_rate = 0.1
        self.weight_mutate_power = 0.5
        self.weight_min_value    = -30.0
        self.weight_max_value    = 30.0
        self.enable_prob         = 0.02

        # [STRUCTURAL_MUTATIONS]
        self.single_mutation = True
        self.conn_add_prob   = 0.2
        self.conn_del_prob   = 0.2
        self.node_add_prob   = 0.1
        self.node_del_prob   = 0.1

        # [SPECIATION]
        self.compat_disjoint_coefficient = 1.0
        self.compat_weight_coefficient   = 1.0
        self.compatibility_threshold     = 2.0

        if config_file is None:
            self.validate()
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Helper function to safely parse values
        def get_value(section, key, value_type, default):
            try:
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return parser.get(section, key)
            except (configparser.NoSectionError, configparser.NoOptionError):
                return default

        # [GENOME]

        # The number of input and output nodes. Input nodes are numbered
        # [0, num_inputs), output nodes [num_inputs, num_inputs + num_outputs).
        self.num_inputs  = get_value('GENOME', 'num_inputs' , int, self.num_inputs)
        self.num_outputs = get_value('GENOME', 'num_outputs', int, self.num_outputs)

        # Hidden node IDs are drawn at random from [num_inputs + num_outputs, max_node_id].
        self.max_node_id = get_value('GENOME', 'max_node_id', int, self.max_node_id)

        # [NODE]

        # The mean and standard deviation of the normal distributions used
        # to initialize the 'bias' & 'response' parameters for new nodes.
        self.bias_init_mean      = get_value('NODE', 'bias_init_mean'     , float, self.bias_init_mean)
        self.bias_init_stdev     = get_value('NODE', 'bias_init_stdev'    , float, self.bias_init_stdev)
        self.response_init_mean  = get_value('NODE', 'response_init_mean' , float, self.response_init_mean)
        self.response_init_stdev = get_value('NODE', 'response_init_stdev', float, self.response_init_stdev)

        # Activation & aggregation functions of new nodes (see 'graphneat.activations').
        self.activation_default  = get_value('NODE', 'activation_default' , str, self.activation_default)
        self.aggregation_default = get_value('NODE', 'aggregation_default', str, self.aggregation_default)

        # The probability that mutation will change the 'bias' by adding a random
        # value, the probability that it will replace it with a new random value,
        # and the standard deviation of the zero-centered perturbation.
        self.bias_mutate_rate  = get_value('NODE', 'bias_mutate_rate' , float, self.bias_mutate_rate)
        self.bias_replace_rate = get_value('NODE', 'bias_replace_rate', float, self.bias_replace_rate)
        self.bias_mutate_power = get_value('NODE', 'bias_mutate_power', float, self.bias_mutate_power)

        # The minimum and maximum allowed 'bias' values.
        self.bias_min_value = get_value('NODE', 'bias_min_value', float, self.bias_min_value)
        self.bias_max_value = get_value('NODE', 'bias_max_value', float, self.bias_max_value)

        # Same as above, for the 'response' parameter.
        self.response_mutate_rate  = get_value('NODE', 'response_mutate_rate' , float, self.response_mutate_rate)
        self.response_replace_rate = get_value('NODE', 'response_replace_rate', float, self.response_replace_rate)
        self.response_mutate_power = get_value('NODE', 'response_mutate_power', float, self.response_mutate_power)
        self.response_min_value    = get_value('NODE', 'response_min_value'   , float, self.response_min_value)
        self.response_max_value    = get_value('NODE', 'response_max_value'   , float, self.response_max_value)

        # The probability that mutation will draw a new activation (aggregation) function.
        self.activation_mut_prob  = get_value('NODE', 'activation_mut_prob' , float, self.activation_mut_prob)
        self.aggregation_mut_prob = get_value('NODE', 'aggregation_mut_prob', float, self.aggregation_mut_prob)

        # [CONNECTION]

        # Same as for 'bias', for the connection 'weight'.
        self.weight_mutate_rate  = get_value('CONNECTION', 'weight_mutate_rate' , float, self.weight_mutate_rate)
        self.weight_replace_rate = get_value('CONNECTION', 'weight_replace_rate', float, self.weight_replace_rate)
        self.weight_mutate_power = get_value('CONNECTION', 'weight_mutate_power', float, self.weight_mutate_power)
        self.weight_min_value    = get_value('CONNECTION', 'weight_min_value'   , float, self.weight_min_value)
        self.weight_max_value    = get_value('CONNECTION', 'weight_max_value'   , float, self.weight_max_value)

        # The probability that mutation will toggle the enabled status of a connection.
        self.enable_prob = get_value('CONNECTION', 'enable_prob', float, self.enable_prob)

        # [STRUCTURAL_MUTATIONS]

        # If this is 'True', exactly one structural mutation (the addition or removal
        # of a node or connection) is drawn per genome per call to 'mutate()'.
        self.single_mutation = get_value('STRUCTURAL_MUTATIONS', 'single_mutation', bool, self.single_mutation)

        # The probabilities of adding / deleting a connection and of adding / deleting a node.
        self.conn_add_prob = get_value('STRUCTURAL_MUTATIONS', 'conn_add_prob', float, self.conn_add_prob)
        self.conn_del_prob = get_value('STRUCTURAL_MUTATIONS', 'conn_del_prob', float, self.conn_del_prob)
        self.node_add_prob = get_value('STRUCTURAL_MUTATIONS', 'node_add_prob', float, self.node_add_prob)
        self.node_del_prob = get_value('STRUCTURAL_MUTATIONS', 'node_del_prob', float, self.node_del_prob)

        # [SPECIATION]

        # The coefficient for the count of genes present in only one of two genomes.
        self.compat_disjoint_coefficient = get_value('SPECIATION', 'compat_disjoint_coefficient', float,
                                                     self.compat_disjoint_coefficient)

        # The coefficient for parameter differences between homologous genes.
        self.compat_weight_coefficient = get_value('SPECIATION', 'compat_weight_coefficient', float,
                                                   self.compat_weight_coefficient)

        # Genomes closer than this threshold belong to the same species.
        # Not used by this package; read by the species clustering.
        self.compatibility_threshold = get_value('SPECIATION', 'compatibility_threshold', float,
                                                 self.compatibility_threshold)

        self.validate()
        logger.info("Loaded configuration from '{}'", config_file)

    def validate(self) -> None:
        """
        Check that all parameters are within their admissible ranges.

        Raises:
            ValueError: naming the first offending parameter
        """
        if self.num_inputs < 1 or self.num_outputs < 1:
            raise ValueError("A genome needs at least one input and one output node")
        if self.max_node_id < self.num_inputs + self.num_outputs:
            raise ValueError(f"max_node_id ({self.max_node_id}) leaves no room for hidden nodes")

        for name in ('bias', 'response', 'weight'):
            min_value = getattr(self, f"{name}_min_value")
            max_value = getattr(self, f"{name}_max_value")
            if min_value > max_value:
                raise ValueError(f"{name}_min_value ({min_value}) exceeds {name}_max_value ({max_value})")

            mutate_rate  = getattr(self, f"{name}_mutate_rate")
            replace_rate = getattr(self, f"{name}_replace_rate")
            if mutate_rate + replace_rate > 1.0:
                raise ValueError(f"{name}_mutate_rate + {name}_replace_rate must not exceed 1")

        probabilities = ['bias_mutate_rate', 'bias_replace_rate',
                         'response_mutate_rate', 'response_replace_rate',
                         'weight_mutate_rate', 'weight_replace_rate',
                         'activation_mut_prob', 'aggregation_mut_prob', 'enable_prob',
                         'conn_add_prob', 'conn_del_prob', 'node_add_prob', 'node_del_prob']
        for name in probabilities:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

        if self.activation_default not in activations:
            raise ValueError(f"Invalid activation function '{self.activation_default}'")
        if self.aggregation_default not in aggregations:
            raise ValueError(f"Invalid aggregation function '{self.aggregation_default}'")
