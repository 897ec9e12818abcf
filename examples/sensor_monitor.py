"""
Sensor Monitor Example
======================

Subscribes to every room's temperature channel on an emitter.io broker
and replays the last 5 stored readings on subscribe.

Set EMITTER_KEY to a channel key with read/write access to 'sensors/'.
"""

import os
import time

from emitterclient import EmitterClient, ClientConfig, PahoTransport, last, ttl

config = ClientConfig(default_key=os.environ['EMITTER_KEY'],
                      host=os.environ.get('EMITTER_HOST', 'api.emitter.io'))
client = EmitterClient(PahoTransport.from_config(config), config)
client.connect()


@client.on('sensors/+/temp', options=[last(5)])
def on_temp(topic, payload):
    room = topic.split('/')[2]
    print('%s: %s C' % (room, payload.decode('utf-8')))


client.publish('sensors/kitchen/temp', '21.5', options=[ttl(3600)])

try:
    while True:
        time.sleep(1)
except KeyboardInterrupt:
    client.disconnect()
