"""Front-panel hardware emulations: ADC, audio/CV meter, events, LEDs and switches."""